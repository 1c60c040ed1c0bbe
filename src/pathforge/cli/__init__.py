"""Command-line interface for pathforge."""
