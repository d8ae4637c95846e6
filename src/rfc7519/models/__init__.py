"""Data models for the contents of a JWT."""
