"""Core utilities shared across the relay."""
