"""
Resolved formatting for one HTML element.

A ``StyleRecord`` is produced by ``StyleResolver`` from an inline ``style``
attribute (plus the element's ``colspan``) and consumed by ``CellWriter``.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

ValueType = Literal["float", "string", "date", "boolean"]

VALUE_TYPES = ("float", "string", "date", "boolean")


class StyleRecord(BaseModel):
    text_align: str = ""  # verbatim CSS value, "" = unset
    word_wrap: bool = False
    width: float = 0  # Excel column-width units, 0 = unset
    height: float = 0  # points, 0 = unset
    border: bool = False
    font_size: float = 0
    bold: bool = False
    colspan: int = Field(default=1, ge=1)
    vertical_align: str = ""
    value_type: ValueType = "string"
    # Declarations whose value could not be parsed; reported by the caller.
    invalid_declarations: List[str] = []
