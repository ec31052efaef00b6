"""Shared types, path handling, fingerprinting, errors and logging."""
