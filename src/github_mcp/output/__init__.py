"""Text output for tool results."""
