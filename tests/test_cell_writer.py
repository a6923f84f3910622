"""Tests for the openpyxl-backed positional writer."""

from __future__ import annotations

import openpyxl
import pytest
from openpyxl.cell.cell import MergedCell

from dto.style import StyleRecord
from writers.cell_writer import CellWriter, sanitize_sheet_title


def test_first_sheet_renames_default_and_others_are_created() -> None:
    writer = CellWriter()

    assert writer.start_sheet("Summary", is_first=True) == "Summary"
    assert writer.start_sheet("Details", is_first=False) == "Details"
    assert writer.workbook.sheetnames == ["Summary", "Details"]
    assert writer.cursor.sheet == "Details"


def test_start_sheet_resets_cursor(writer: CellWriter) -> None:
    writer.add_row()
    writer.advance(3)

    writer.start_sheet("Next", is_first=False)

    assert (writer.cursor.row, writer.cursor.col) == (0, 1)


@pytest.mark.parametrize(
    "name, expected",
    [("a/b", "a_b"), ("[x]:y?", "_x__y_"), ("", "Sheet"), ("n" * 40, "n" * 31)],
)
def test_sanitize_sheet_title(name: str, expected: str) -> None:
    assert sanitize_sheet_title(name) == expected


def test_add_row_and_advance(writer: CellWriter) -> None:
    writer.add_row()
    writer.advance()
    writer.advance(2)
    assert (writer.cursor.row, writer.cursor.col) == (1, 4)

    writer.advance(0)
    assert writer.cursor.col == 5

    writer.add_row()
    assert (writer.cursor.row, writer.cursor.col) == (2, 1)

    writer.advance()
    writer.reset_column()
    assert writer.cursor.col == 1


def test_cursor_is_a_snapshot(writer: CellWriter) -> None:
    snapshot = writer.cursor
    snapshot.row = 99

    assert writer.cursor.row == 0


def test_writes_do_not_move_the_cursor(writer: CellWriter) -> None:
    writer.add_row()
    writer.write_text("name")
    writer.advance()
    writer.write_number(3.5)

    ws = writer.worksheet
    assert ws["A1"].value == "name"
    assert ws["B1"].value == 3.5
    assert writer.cursor.col == 2


def test_write_before_add_row_fails(writer: CellWriter) -> None:
    with pytest.raises(RuntimeError):
        writer.write_text("too early")


def test_write_before_start_sheet_fails() -> None:
    with pytest.raises(RuntimeError):
        CellWriter().write_text("no sheet")


def test_missing_image_writes_alt_text(writer: CellWriter, tmp_path) -> None:
    writer.add_row()

    embedded = writer.write_image(str(tmp_path / "missing.png"), "N/A")

    assert embedded is False
    assert writer.worksheet["A1"].value == "N/A"
    assert writer.worksheet._images == []


def test_missing_image_without_alt_leaves_cell_empty(writer: CellWriter) -> None:
    writer.add_row()

    writer.write_image("missing.png", "")

    assert writer.worksheet["A1"].value is None


def test_image_is_anchored_at_cursor(writer: CellWriter, png_path) -> None:
    writer.add_row()
    writer.advance()

    assert writer.write_image(str(png_path), "logo") is True

    images = writer.worksheet._images
    assert len(images) == 1
    assert images[0].anchor == "B1"
    assert (images[0].width, images[0].height) == (70, 10)


def test_image_is_scaled_to_column_width(writer: CellWriter, png_path) -> None:
    writer.add_row()
    writer.apply_column_style(StyleRecord(width=2))

    writer.write_image(str(png_path), "logo")

    image = writer.worksheet._images[0]
    assert (image.width, image.height) == (14, 2)


def test_unreadable_image_is_logged_and_skipped(writer: CellWriter, tmp_path) -> None:
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"not a picture")
    writer.add_row()

    assert writer.write_image(str(broken), "alt") is False
    assert writer.worksheet._images == []
    assert writer.worksheet["A1"].value is None


def test_apply_cell_style(writer: CellWriter) -> None:
    writer.add_row()
    writer.write_text("x")
    writer.apply_cell_style(
        StyleRecord(
            bold=True,
            font_size=14,
            text_align="center",
            vertical_align="center",
            word_wrap=True,
            border=True,
        )
    )

    cell = writer.worksheet["A1"]
    assert cell.font.bold is True
    assert cell.font.size == 14
    assert cell.alignment.horizontal == "center"
    assert cell.alignment.vertical == "center"
    assert cell.alignment.wrap_text is True
    assert cell.border.left.style == "thin"
    assert cell.border.bottom.style == "thin"


def test_unknown_alignment_values_are_dropped(writer: CellWriter) -> None:
    writer.add_row()
    writer.apply_cell_style(StyleRecord(text_align="start", vertical_align="baseline"))

    assert writer.worksheet["A1"].alignment.horizontal is None
    assert writer.worksheet["A1"].alignment.vertical is None


def test_colspan_merges_and_blocks_covered_cells(writer: CellWriter) -> None:
    writer.add_row()
    writer.write_text("wide")
    writer.apply_cell_style(StyleRecord(colspan=3))
    writer.advance()
    writer.write_text("hidden")

    ws = writer.worksheet
    assert [str(r) for r in ws.merged_cells.ranges] == ["A1:C1"]
    assert ws["A1"].value == "wide"
    assert isinstance(ws["B1"], MergedCell)
    assert ws["B1"].value is None


def test_overlapping_colspan_is_not_merged(writer: CellWriter) -> None:
    writer.add_row()
    writer.apply_cell_style(StyleRecord(colspan=2))
    writer.reset_column()
    writer.apply_cell_style(StyleRecord(colspan=3))

    assert [str(r) for r in writer.worksheet.merged_cells.ranges] == ["A1:B1"]


@pytest.mark.parametrize(
    "text_align, expected",
    [("CENTER", "center"), ("Right", "right"), ("centercontinuous", "centerContinuous")],
)
def test_alignment_is_case_insensitive(writer: CellWriter, text_align: str, expected: str) -> None:
    writer.add_row()
    writer.apply_cell_style(StyleRecord(text_align=text_align, vertical_align="TOP"))

    assert writer.worksheet["A1"].alignment.horizontal == expected
    assert writer.worksheet["A1"].alignment.vertical == "top"


def test_apply_row_style(writer: CellWriter) -> None:
    writer.add_row()
    writer.write_text("plain")
    writer.advance()
    writer.write_text("styled")
    writer.apply_cell_style(StyleRecord(font_size=20))

    writer.apply_row_style(StyleRecord(height=30, bold=True))

    ws = writer.worksheet
    assert ws.row_dimensions[1].height == 30
    assert ws["A1"].font.bold is True
    assert ws["B1"].font.bold is False
    assert ws["B1"].font.size == 20


def test_apply_column_style(writer: CellWriter) -> None:
    writer.add_row()
    writer.apply_column_style(StyleRecord(width=12))
    writer.advance()
    writer.apply_column_style(StyleRecord())

    ws = writer.worksheet
    assert ws.column_dimensions["A"].width == 12
    assert "B" not in ws.column_dimensions


def test_save_round_trip(writer: CellWriter, tmp_path) -> None:
    writer.add_row()
    writer.write_text("hello")
    path = tmp_path / "out.xlsx"

    writer.save(str(path))

    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ["Test"]
    assert wb["Test"]["A1"].value == "hello"
