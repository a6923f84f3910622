"""Spreadsheet output writers."""

from writers.cell_writer import CellWriter

__all__ = ["CellWriter"]
