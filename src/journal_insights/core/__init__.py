"""Core types, configuration and errors."""
