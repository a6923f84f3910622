"""
HTML table transcription.

The canonical processing order for one table is:
  1. HeaderProcessor    — ``<thead>`` rows, typed header values
  2. RowBatchProcessor  — body rows, in fixed-size batches
``TableTranscriber`` drives both for every table of a document.
"""

from transcription.header import HeaderProcessor
from transcription.rows import RowBatchProcessor, iter_batches
from transcription.table import TableTranscriber

__all__ = [
    "HeaderProcessor",
    "RowBatchProcessor",
    "TableTranscriber",
    "iter_batches",
]
