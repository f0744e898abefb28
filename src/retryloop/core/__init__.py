"""Core retry engine."""
