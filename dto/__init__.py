"""Data transfer objects shared across the pipeline."""
