"""Cloud SDK collaborators."""
