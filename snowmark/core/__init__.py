"""Core utilities shared by every snowmark stage."""
