"""Command-line interface for script-sandbox."""
