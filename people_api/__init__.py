"""People API service package."""
