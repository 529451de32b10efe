"""Data transfer objects for the API layer."""
