"""Configuration, traversal and scanning."""
