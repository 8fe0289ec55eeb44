"""Domain services package."""
