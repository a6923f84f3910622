"""
StyleResolver — turns an inline ``style`` attribute into a ``StyleRecord``.

Only a fixed set of CSS properties is recognised.  Each one is handled by
its own small method, registered in ``StyleResolver._handlers``; anything
not in that mapping is ignored.

Sizing rules:
  - ``width`` / ``height`` always set the dimension.
  - ``min-*`` / ``max-*`` are fallbacks and only apply while the primary
    dimension is still unset (``<= 0``), whatever the declaration order.

The resolver never logs.  Values it cannot parse are collected in
``StyleRecord.invalid_declarations`` and the field keeps its prior value.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from config.settings import RendererSettings
from dto.style import VALUE_TYPES, StyleRecord
from styles.constants import (
    BORDER_INHERIT,
    BORDER_LINE_STYLES,
    BORDER_OFF_VALUES,
    BREAK_WORD,
    VALUE_TYPE_PROPERTY,
    VERTICAL_ALIGN_ALIASES,
    WRAPPING_WHITE_SPACE,
)

Handler = Callable[[StyleRecord, str], None]


def _parse_px(value: str) -> int:
    """Parse ``"120px"`` / ``" 120 "`` into ``120``.  Raises ``ValueError``."""
    text = value.strip().lower()
    if text.endswith("px"):
        text = text[:-2]
    return int(text.strip())


def _split_declaration(declaration: str) -> Optional[Tuple[str, str]]:
    """Return ``(property, value)`` or ``None`` for a malformed fragment."""
    if ":" not in declaration:
        return None
    prop, value = declaration.split(":", 1)
    prop = prop.strip().lower()
    if not prop:
        return None
    return prop, value.strip()


def _is_visible_border(value: str) -> bool:
    text = value.lower()
    if text == BORDER_INHERIT:
        return True
    if text in BORDER_OFF_VALUES:
        return False
    for token in text.split():
        if token in BORDER_LINE_STYLES:
            return True
        try:
            if _parse_px(token) > 0:
                return True
        except ValueError:
            continue
    return False


class StyleResolver:
    """
    Resolve ``style`` / ``colspan`` attribute values into ``StyleRecord``.

    Usage::

        resolver = StyleResolver(settings)
        record = resolver.resolve("width: 120px; font-weight: bold", "2")
    """

    def __init__(self, settings: RendererSettings) -> None:
        self._width_multiplier = settings.px_to_excel_width_multiplier
        self._height_multiplier = settings.px_to_excel_height_multiplier
        self._handlers: Dict[str, Handler] = {
            "text-align": self._text_align,
            "white-space": self._white_space,
            "word-wrap": self._break_word,
            "overflow-wrap": self._break_word,
            "width": self._width,
            "min-width": self._fallback_width,
            "max-width": self._fallback_width,
            "height": self._height,
            "min-height": self._fallback_height,
            "max-height": self._fallback_height,
            "border": self._border,
            "border-style": self._border,
            "font-size": self._font_size,
            "font-weight": self._font_weight,
            "vertical-align": self._vertical_align,
            VALUE_TYPE_PROPERTY: self._value_type,
            "colspan": self._colspan,
        }

    @property
    def properties(self) -> Tuple[str, ...]:
        """Names of every recognised style property."""
        return tuple(self._handlers)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        style: Optional[str],
        colspan: Optional[str] = None,
    ) -> StyleRecord:
        record = StyleRecord()

        for declaration in (style or "").split(";"):
            parsed = _split_declaration(declaration)
            if parsed is None:
                continue
            prop, value = parsed
            handler = self._handlers.get(prop)
            if handler is None:
                continue
            try:
                handler(record, value)
            except ValueError:
                record.invalid_declarations.append(declaration.strip())

        if colspan is not None:
            try:
                self._colspan(record, colspan)
            except ValueError:
                record.invalid_declarations.append(f"colspan={colspan.strip()}")

        return record

    # ------------------------------------------------------------------
    # Property handlers
    # ------------------------------------------------------------------

    def _text_align(self, record: StyleRecord, value: str) -> None:
        record.text_align = value

    def _white_space(self, record: StyleRecord, value: str) -> None:
        record.word_wrap = value.lower() in WRAPPING_WHITE_SPACE

    def _break_word(self, record: StyleRecord, value: str) -> None:
        record.word_wrap = value.lower() == BREAK_WORD

    def _width(self, record: StyleRecord, value: str) -> None:
        record.width = _parse_px(value) * self._width_multiplier

    def _fallback_width(self, record: StyleRecord, value: str) -> None:
        if record.width <= 0:
            self._width(record, value)

    def _height(self, record: StyleRecord, value: str) -> None:
        record.height = _parse_px(value) * self._height_multiplier

    def _fallback_height(self, record: StyleRecord, value: str) -> None:
        if record.height <= 0:
            self._height(record, value)

    def _border(self, record: StyleRecord, value: str) -> None:
        record.border = _is_visible_border(value)

    def _font_size(self, record: StyleRecord, value: str) -> None:
        record.font_size = float(_parse_px(value))

    def _font_weight(self, record: StyleRecord, value: str) -> None:
        record.bold = "bold" in value.lower()

    def _vertical_align(self, record: StyleRecord, value: str) -> None:
        value = value.lower()
        record.vertical_align = VERTICAL_ALIGN_ALIASES.get(value, value)

    def _value_type(self, record: StyleRecord, value: str) -> None:
        value = value.lower()
        if value in VALUE_TYPES:
            record.value_type = value

    def _colspan(self, record: StyleRecord, value: str) -> None:
        span = int(value.strip())
        if span < 1:
            raise ValueError(f"colspan must be positive, got {span}")
        record.colspan = span
