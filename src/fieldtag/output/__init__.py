"""Output formatting for CLI results."""
