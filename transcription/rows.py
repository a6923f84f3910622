"""
RowBatchProcessor — writes table body rows one batch at a time.

The transcriber walks a table's rows in slices of ``batch_size`` so that
only a bounded number of row nodes is being styled at any moment.  Each
call handles the inclusive range
``[offset, offset + min(batch_size, len(rows) - offset) - 1]`` and is a
no-op once ``offset`` runs past the end.

For every row:
  1. ``<th>`` cells found inside the row are written text-only (some
     templates put header cells in body rows);
  2. the column resets to 1;
  3. ``<td>`` cells are written (images override text);
  4. the row's own ``style`` becomes a row style.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from lxml import etree

from styles.constants import STYLE_ATTR
from transcription.base import BaseProcessor
from utils.html import attr, find_data_cells, find_header_cells, text_of
from writers.cell_writer import CellWriter

logger = logging.getLogger(__name__)


def iter_batches(total: int, batch_size: int) -> Iterator[int]:
    """Yield the batch offsets ``0, batch_size, 2 * batch_size, ...`` below *total*."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    yield from range(0, total, batch_size)


class RowBatchProcessor(BaseProcessor):

    def process(
        self,
        rows: Sequence[etree._Element],
        writer: CellWriter,
        offset: int,
        batch_size: int,
    ) -> int:
        """Write one batch of *rows*; returns how many rows were written."""
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if offset < 0 or offset >= len(rows):
            return 0

        count = min(batch_size, len(rows) - offset)
        for tr in rows[offset:offset + count]:
            writer.add_row()
            self._write_header_cells(tr, writer)
            writer.reset_column()
            self._write_data_cells(tr, writer)

            if attr(tr, STYLE_ATTR) is not None:
                writer.apply_row_style(self._resolve(tr, with_colspan=False))

        logger.debug("Rows %d..%d written", offset, offset + count - 1)
        return count

    def _write_header_cells(self, tr: etree._Element, writer: CellWriter) -> None:
        for th in find_header_cells(tr):
            style = self._resolve_if_present(th)
            self._write_cell_content(th, writer)
            if style is not None:
                writer.apply_column_style(style)
                writer.apply_cell_style(style)
            writer.advance(style.colspan if style is not None else 1)

    def _write_data_cells(self, tr: etree._Element, writer: CellWriter) -> None:
        for td in find_data_cells(tr):
            style = self._resolve_if_present(td)
            self._write_cell_content(td, writer)
            if style is not None:
                writer.apply_cell_style(style)
            writer.advance(style.colspan if style is not None else 1)

    def _write_cell_content(self, cell: etree._Element, writer: CellWriter) -> None:
        if self._write_images(cell, writer):
            return
        content = text_of(cell)
        if content:
            writer.write_text(content)
