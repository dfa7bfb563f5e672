"""Core value objects."""
