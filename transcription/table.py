"""
TableTranscriber — the top-level HTML -> xlsx orchestrator.

Every ``<table>`` of the document becomes one worksheet, in document order.
The sheet is named from the table's ``data-name`` attribute, or
``"DataSheet {index}"`` when it has none.  Header rows go through
``HeaderProcessor``, body rows through ``RowBatchProcessor`` in batches of
``batch_size``.

The workbook is saved once, after every table has been written; if
anything fails the exception propagates and nothing is written to disk.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from lxml import etree

from config.settings import RendererSettings
from styles.constants import SHEET_NAME_ATTR
from styles.resolver import StyleResolver
from transcription.header import HeaderProcessor
from transcription.rows import RowBatchProcessor, iter_batches
from utils.html import attr, find_body_rows, find_header_rows, find_tables, parsed_document
from writers.cell_writer import CellWriter

logger = logging.getLogger(__name__)


def sheet_name_for(table: etree._Element, index: int) -> str:
    """``data-name`` of *table*, or the generated fallback name."""
    name = (attr(table, SHEET_NAME_ATTR) or "").strip()
    if not name:
        name = f"DataSheet {index}"
        logger.info("No data-name found for table %d. Using %r as sheet name", index, name)
    return name


class TableTranscriber:
    """
    Usage::

        transcriber = TableTranscriber(settings)
        transcriber.transcribe(html, "report.xlsx")
    """

    def __init__(
        self,
        settings: RendererSettings,
        writer_factory: Callable[[], CellWriter] = CellWriter,
    ) -> None:
        self.settings = settings
        self._writer_factory = writer_factory
        resolver = StyleResolver(settings)
        self.header_processor = HeaderProcessor(resolver)
        self.row_processor = RowBatchProcessor(resolver)
        # Diagnostics of the last transcribe() call.
        self.total_rows = 0
        self.sheet_names: list[str] = []

    def transcribe(
        self,
        html: str,
        output_path: str,
        batch_size: Optional[int] = None,
    ) -> str:
        """Write every table of *html* to *output_path*; returns the path."""
        batch_size = batch_size or self.settings.batch_size
        writer = self._writer_factory()
        self.total_rows = 0
        self.sheet_names = []

        with parsed_document(html) as root:
            tables = find_tables(root)
            if not tables:
                logger.warning("No <table> found in the rendered HTML")

            for index, table in enumerate(tables):
                self._transcribe_table(table, index, writer, batch_size)

        writer.save(output_path)
        logger.info(
            "Total rows done: %d in %d sheet(s)",
            self.total_rows,
            len(self.sheet_names),
        )
        return output_path

    def _transcribe_table(
        self,
        table: etree._Element,
        index: int,
        writer: CellWriter,
        batch_size: int,
    ) -> None:
        title = writer.start_sheet(sheet_name_for(table, index), is_first=index == 0)
        self.sheet_names.append(title)

        header_count = self.header_processor.process(find_header_rows(table), writer)

        rows = find_body_rows(table)
        body_count = 0
        for offset in iter_batches(len(rows), batch_size):
            body_count += self.row_processor.process(rows, writer, offset, batch_size)

        self.total_rows += header_count + body_count
        logger.info(
            "Sheet '%s': %d header row(s), %d body row(s)",
            title,
            header_count,
            body_count,
        )
