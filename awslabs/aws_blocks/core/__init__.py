"""Core functionality for AWS blocks."""
