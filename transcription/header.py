"""
HeaderProcessor — writes ``<thead>`` rows.

Header cells may carry a value type through the ``value-type`` style
property.  ``float`` cells are written as numbers, ``string`` cells (the
default) as text.  ``date`` and ``boolean`` are accepted by the resolver
but have no writer yet, so such cells are left empty.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from lxml import etree

from dto.style import StyleRecord
from styles.constants import STYLE_ATTR
from transcription.base import BaseProcessor
from utils.html import attr, find_header_cells, text_of
from writers.cell_writer import CellWriter

logger = logging.getLogger(__name__)


class HeaderProcessor(BaseProcessor):
    """
    Usage::

        HeaderProcessor(resolver).process(find_header_rows(table), writer)
    """

    def process(self, header_rows: Sequence[etree._Element], writer: CellWriter) -> int:
        """Write every header row; returns the number of rows written."""
        for tr in header_rows:
            writer.add_row()

            for th in find_header_cells(tr):
                style = self._resolve(th)
                if not self._write_images(th, writer):
                    self._write_typed_value(th, style, writer)

                writer.apply_column_style(style)
                writer.apply_cell_style(style)
                writer.advance(style.colspan)

            if attr(tr, STYLE_ATTR) is not None:
                writer.apply_row_style(self._resolve(tr, with_colspan=False))

        return len(header_rows)

    def _write_typed_value(
        self,
        th: etree._Element,
        style: StyleRecord,
        writer: CellWriter,
    ) -> None:
        content = text_of(th)
        if not content:
            return

        if style.value_type == "float":
            try:
                value = float(content)
                if not math.isfinite(value):
                    raise ValueError(f"not a finite number: {content!r}")
            except ValueError:
                logger.error(
                    "Cant parse header cell %r as float at %s, value skipped",
                    content,
                    writer.cursor,
                )
                return
            writer.write_number(value)
        elif style.value_type == "string":
            writer.write_text(content)
        else:
            logger.warning(
                "Header cell value type %r is not supported, cell left empty",
                style.value_type,
            )
