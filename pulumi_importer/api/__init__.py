"""HTTP transport for the importer operations."""
