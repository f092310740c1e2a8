"""Error handling and timestamp parsing helpers."""
