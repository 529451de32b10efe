"""Storage infrastructure."""
