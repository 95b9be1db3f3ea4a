"""Command-line interface for prodcal."""
