"""Command line interface for the file service."""
