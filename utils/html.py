"""
HTML parsing helpers built on ``lxml.html``.

All structural lookups go through the XPath expressions compiled once at
import time below.  ``parsed_document`` is the only way the pipeline
obtains a tree, and it always releases the tree on exit.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

import lxml.html
from lxml import etree

from exceptions import HtmlParseError

logger = logging.getLogger(__name__)

XPATH_TABLE = etree.XPath(".//table")
XPATH_THEAD_ROWS = etree.XPath(".//thead/tr")
XPATH_TH = etree.XPath(".//th")
# Body rows: direct rows plus rows of <tbody>/<tfoot>, never <thead> rows.
XPATH_BODY_ROWS = etree.XPath("./tr | ./tbody/tr | ./tfoot/tr")
XPATH_TD = etree.XPath(".//td")
XPATH_IMG = etree.XPath(".//img")


def find_tables(root: etree._Element) -> List[etree._Element]:
    return XPATH_TABLE(root)


def find_header_rows(table: etree._Element) -> List[etree._Element]:
    return XPATH_THEAD_ROWS(table)


def find_body_rows(table: etree._Element) -> List[etree._Element]:
    return XPATH_BODY_ROWS(table)


def find_header_cells(node: etree._Element) -> List[etree._Element]:
    return XPATH_TH(node)


def find_data_cells(node: etree._Element) -> List[etree._Element]:
    return XPATH_TD(node)


def find_images(node: etree._Element) -> List[etree._Element]:
    return XPATH_IMG(node)


def attr(node: etree._Element, name: str) -> Optional[str]:
    """Attribute value, or ``None`` when the attribute is absent."""
    return node.get(name)


def text_of(node: etree._Element) -> str:
    """Whitespace-trimmed text content of *node* and its descendants."""
    return node.text_content().strip()


def parse_html(html: str) -> etree._Element:
    """Parse *html* into a document root.  Raises ``HtmlParseError``."""
    try:
        return lxml.html.document_fromstring(html)
    except (etree.ParserError, ValueError) as exc:
        raise HtmlParseError(f"Parse html ERROR: {exc}") from exc


@contextmanager
def parsed_document(html: str) -> Iterator[etree._Element]:
    """
    Parse *html* and yield the document root; the tree is cleared when the
    block exits, whether it succeeded or not.
    """
    root = parse_html(html)
    try:
        yield root
    finally:
        root.clear()
        logger.debug("Parsed HTML document released")
