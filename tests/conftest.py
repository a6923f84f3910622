"""Shared fixtures for the renderer test-suite."""

from __future__ import annotations

import lxml.html
import pytest
from PIL import Image as PILImage

from config.settings import RendererSettings
from styles.resolver import StyleResolver
from utils.html import find_tables
from writers.cell_writer import CellWriter


@pytest.fixture
def settings() -> RendererSettings:
    # Round multipliers keep the expected sizes easy to read.
    return RendererSettings(
        batch_size=10,
        px_to_excel_width_multiplier=0.5,
        px_to_excel_height_multiplier=2.0,
    )


@pytest.fixture
def resolver(settings: RendererSettings) -> StyleResolver:
    return StyleResolver(settings)


@pytest.fixture
def writer() -> CellWriter:
    w = CellWriter()
    w.start_sheet("Test", is_first=True)
    return w


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "logo.png"
    PILImage.new("RGB", (70, 10), color="red").save(path)
    return path


@pytest.fixture
def make_table():
    """Factory: parse ``<table {attrs}>{body}</table>`` and return the table element."""

    def _make(body: str, attrs: str = ""):
        root = lxml.html.document_fromstring(f"<html><body><table {attrs}>{body}</table></body></html>")
        return find_tables(root)[0]

    return _make
