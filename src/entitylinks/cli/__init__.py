"""Command line interface for entitylinks."""
