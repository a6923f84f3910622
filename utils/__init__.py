"""HTML parsing and process helpers."""
