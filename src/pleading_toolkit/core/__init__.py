"""Core models and loading utilities shared by the builder and CLI."""
