"""
Shared plumbing for the header and body row processors.
"""

from __future__ import annotations

import logging
from typing import Optional

from lxml import etree

from dto.style import StyleRecord
from styles.constants import COLSPAN_ATTR, STYLE_ATTR
from styles.resolver import StyleResolver
from utils.html import attr, find_images
from writers.cell_writer import CellWriter

logger = logging.getLogger(__name__)


class BaseProcessor:
    """Resolves element styles and writes cell images for subclasses."""

    def __init__(self, resolver: StyleResolver) -> None:
        self.resolver = resolver

    def _resolve(self, element: etree._Element, with_colspan: bool = True) -> StyleRecord:
        """Resolve *element*'s ``style`` (and ``colspan``) attributes."""
        colspan = attr(element, COLSPAN_ATTR) if with_colspan else None
        record = self.resolver.resolve(attr(element, STYLE_ATTR), colspan)
        if record.invalid_declarations:
            logger.warning(
                "Ignoring unparseable style values on <%s> (line %s): %s",
                element.tag,
                element.sourceline,
                "; ".join(record.invalid_declarations),
            )
        return record

    def _resolve_if_present(self, element: etree._Element) -> Optional[StyleRecord]:
        """Like ``_resolve`` but ``None`` when *element* has neither ``style`` nor ``colspan``."""
        if attr(element, STYLE_ATTR) is None and attr(element, COLSPAN_ATTR) is None:
            return None
        return self._resolve(element)

    @staticmethod
    def _write_images(cell: etree._Element, writer: CellWriter) -> bool:
        """
        Write every ``<img>`` found in *cell* to the current position.
        Returns False when the cell holds no image.
        """
        images = find_images(cell)
        for img in images:
            writer.write_image(attr(img, "src") or "", attr(img, "alt") or "")
        return bool(images)
