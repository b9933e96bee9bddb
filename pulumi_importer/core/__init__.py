"""Core data model, lookup tables and result types."""
