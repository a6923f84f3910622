"""
CellWriter — positional writer on top of an openpyxl ``Workbook``.

The writer owns the ``Cursor`` (active sheet, row, column).  Callers move it
only through ``start_sheet`` / ``add_row`` / ``reset_column`` / ``advance``;
every write and style operation targets the cell under the cursor.

Writes do not move the cursor.  Processors call ``advance()`` once per
source cell, after its value and styles are in place.

Not safe for concurrent use.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.cell.cell import MergedCell
from openpyxl.drawing.image import Image
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.cell_range import CellRange
from openpyxl.worksheet.worksheet import Worksheet

from dto.cursor import Cursor
from dto.style import StyleRecord

logger = logging.getLogger(__name__)

# Excel sheet limits
_MAX_COLUMN = 16384
_MAX_SHEET_TITLE = 31
_INVALID_TITLE_CHARS = re.compile(r"[\\*?:/\[\]]")

_HORIZONTAL = frozenset(
    {"general", "left", "center", "right", "fill", "justify", "centerContinuous", "distributed"}
)
_VERTICAL = frozenset({"top", "center", "bottom", "justify", "distributed"})

# Lower-cased CSS value -> openpyxl spelling
_HORIZONTAL_BY_KEY = {value.lower(): value for value in _HORIZONTAL}

# Approximate pixel size of one column-width unit / one point of row height,
# used to fit embedded pictures into their cell.
_PX_PER_WIDTH_UNIT = 7.0
_PX_PER_POINT = 4.0 / 3.0

_THIN = Side(style="thin")
_THIN_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


def sanitize_sheet_title(name: str) -> str:
    """Make *name* acceptable as an Excel sheet title."""
    title = _INVALID_TITLE_CHARS.sub("_", name or "").strip()
    title = title[:_MAX_SHEET_TITLE]
    return title or "Sheet"


def _font(record: StyleRecord) -> Optional[Font]:
    if record.font_size <= 0 and not record.bold:
        return None
    return Font(size=record.font_size or None, bold=record.bold)


def _alignment(record: StyleRecord) -> Optional[Alignment]:
    horizontal = _HORIZONTAL_BY_KEY.get((record.text_align or "").lower())
    vertical = (record.vertical_align or "").lower()
    if vertical not in _VERTICAL:
        vertical = None
    if horizontal is None and vertical is None and not record.word_wrap:
        return None
    return Alignment(
        horizontal=horizontal,
        vertical=vertical,
        wrap_text=record.word_wrap or None,
    )


class CellWriter:
    """
    Usage::

        writer = CellWriter()
        writer.start_sheet("Report", is_first=True)
        writer.add_row()
        writer.write_text("Name")
        writer.apply_cell_style(record)
        writer.advance()
        writer.save("out.xlsx")
    """

    def __init__(self, workbook: Optional[Workbook] = None) -> None:
        self.workbook = workbook if workbook is not None else Workbook()
        self._ws: Optional[Worksheet] = None
        self._cursor = Cursor()

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> Cursor:
        """Snapshot of the current position."""
        return self._cursor.model_copy()

    @property
    def worksheet(self) -> Worksheet:
        if self._ws is None:
            raise RuntimeError("start_sheet() must be called before writing")
        return self._ws

    def start_sheet(self, name: str, is_first: bool) -> str:
        """
        Rename the default worksheet (first table) or create a new one.
        Returns the title actually used.
        """
        title = sanitize_sheet_title(name)
        if title != name:
            logger.warning("Sheet name %r is not valid in Excel, using %r", name, title)

        if is_first:
            ws = self.workbook.active
            ws.title = title
        else:
            ws = self.workbook.create_sheet(title=title)

        self._ws = ws
        self._cursor = Cursor(sheet=ws.title, row=0, col=1)
        return ws.title

    def add_row(self) -> None:
        self._cursor.row += 1
        self._cursor.col = 1

    def reset_column(self) -> None:
        self._cursor.col = 1

    def advance(self, span: int = 1) -> None:
        self._cursor.col += max(span, 1)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _writable_cell(self):
        ws = self.worksheet
        if self._cursor.row < 1:
            raise RuntimeError("add_row() must be called before writing")
        if self._cursor.col > _MAX_COLUMN:
            logger.warning(
                "Column %d is beyond the last Excel column, value dropped",
                self._cursor.col,
            )
            return None
        cell = ws.cell(row=self._cursor.row, column=self._cursor.col)
        if isinstance(cell, MergedCell):
            logger.warning(
                "Cell %s on '%s' is covered by a merged range, value dropped",
                cell.coordinate,
                ws.title,
            )
            return None
        return cell

    def _write(self, value: Union[str, float]) -> None:
        cell = self._writable_cell()
        if cell is not None:
            cell.value = value

    def write_text(self, value: str) -> None:
        self._write(value)

    def write_number(self, value: float) -> None:
        self._write(value)

    def write_image(self, path: str, alt_text: Optional[str] = None) -> bool:
        """
        Embed the picture at *path* in the current cell.

        A missing file falls back to writing *alt_text*; embedding errors
        are logged and leave the cell untouched.  Returns True when the
        picture was embedded.
        """
        if not path or not os.path.isfile(path):
            logger.warning("Cant access image file %r, writing alt text instead", path)
            if alt_text:
                self.write_text(alt_text)
            return False

        cell = self._writable_cell()
        if cell is None:
            return False

        try:
            image = Image(path)
            self._fit_image(image)
            self.worksheet.add_image(image, cell.coordinate)
        except Exception:
            logger.error(
                "Failed to embed image %r at %s!%s",
                path,
                self.worksheet.title,
                cell.coordinate,
                exc_info=True,
            )
            return False
        return True

    def _fit_image(self, image: Image) -> None:
        """Shrink *image* to the current cell, keeping its aspect ratio."""
        ws = self.worksheet
        letter = get_column_letter(self._cursor.col)
        ratios = [1.0]

        if letter in ws.column_dimensions:
            width = ws.column_dimensions[letter].width
            if width and image.width:
                ratios.append(width * _PX_PER_WIDTH_UNIT / image.width)

        if self._cursor.row in ws.row_dimensions:
            height = ws.row_dimensions[self._cursor.row].height
            if height and image.height:
                ratios.append(height * _PX_PER_POINT / image.height)

        ratio = min(ratios)
        if ratio < 1.0:
            image.width = max(int(image.width * ratio), 1)
            image.height = max(int(image.height * ratio), 1)

    # ------------------------------------------------------------------
    # Styles
    # ------------------------------------------------------------------

    def apply_cell_style(self, record: StyleRecord) -> None:
        """Font, alignment, border and colspan merge for the current cell."""
        cell = self._writable_cell()
        if cell is None:
            return

        font = _font(record)
        if font is not None:
            cell.font = font
        alignment = _alignment(record)
        if alignment is not None:
            cell.alignment = alignment
        if record.border:
            cell.border = _THIN_BORDER

        if record.colspan > 1:
            end_col = min(self._cursor.col + record.colspan - 1, _MAX_COLUMN)
            if end_col > self._cursor.col:
                self._merge(end_col)

    def _merge(self, end_col: int) -> None:
        """Merge the current cell through *end_col* unless that overlaps an existing merge."""
        ws = self.worksheet
        span = CellRange(
            min_col=self._cursor.col,
            min_row=self._cursor.row,
            max_col=end_col,
            max_row=self._cursor.row,
        )
        for existing in ws.merged_cells.ranges:
            if not span.isdisjoint(existing):
                logger.warning(
                    "Colspan at %s overlaps merged range %s, merge skipped",
                    self._cursor,
                    existing.coord,
                )
                return
        ws.merge_cells(span.coord)

    def apply_row_style(self, record: StyleRecord) -> None:
        """
        Row height plus row-level formatting.  The formatting is also copied
        onto cells of the row that carry no style of their own.
        """
        ws = self.worksheet
        row = self._cursor.row
        if row < 1:
            return
        dimension = ws.row_dimensions[row]
        if record.height > 0:
            dimension.height = record.height

        font = _font(record)
        alignment = _alignment(record)
        border = _THIN_BORDER if record.border else None
        if font is None and alignment is None and border is None:
            return

        if font is not None:
            dimension.font = font
        if alignment is not None:
            dimension.alignment = alignment
        if border is not None:
            dimension.border = border

        for cell in ws[row]:
            if isinstance(cell, MergedCell) or cell.has_style:
                continue
            if font is not None:
                cell.font = font
            if alignment is not None:
                cell.alignment = alignment
            if border is not None:
                cell.border = border

    def apply_column_style(self, record: StyleRecord) -> None:
        if record.width <= 0 or self._cursor.col > _MAX_COLUMN:
            return
        letter = get_column_letter(self._cursor.col)
        self.worksheet.column_dimensions[letter].width = record.width

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path: str) -> None:
        self.workbook.save(path)
        logger.info("Workbook saved to %s", path)
