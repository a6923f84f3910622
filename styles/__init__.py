"""Inline CSS style resolution."""

from styles.resolver import StyleResolver

__all__ = ["StyleResolver"]
