"""Command-line interface for the adaptive engine."""
