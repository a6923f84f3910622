"""
Custom Handlebars helpers available to report templates.

pybars calls every helper with the current context (``this``) first,
followed by the positional arguments written in the template.  Block
helpers additionally receive ``options`` (with ``fn`` / ``inverse``)
right after ``this``.

All helpers are forgiving: bad input renders a neutral value instead of
failing the whole template.
"""

from __future__ import annotations

import logging
import operator
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DASH = "-"
ALLOWED_LABEL = "Допущен"
NOT_ALLOWED_LABEL = "Не допущен"
NOT_FOUND_NAME = "Не найден"
INSPECTION_TIME_FORMAT = "%d.%m.%Y %H:%M"

_OPERATORS: Dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
}


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_number(value: Any) -> Optional[float]:
    """Best-effort numeric conversion; ``None`` when not a number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def _format_number(value: float) -> str:
    """Render integral floats without the trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def math_helper(this: Any, left: Any, op: str, right: Any) -> str:
    """``{{math a "+" b}}``"""
    a, b = _to_number(left), _to_number(right)
    func = _OPERATORS.get(str(op).strip())
    if a is None or b is None or func is None:
        logger.warning("math helper cannot evaluate %r %r %r", left, op, right)
        return ""
    try:
        return _format_number(func(a, b))
    except ZeroDivisionError:
        return ""


def key_helper(this: Any, mapping: Any, name: Any) -> Any:
    """``{{key map "name"}}``: look a key up in a map."""
    if not isinstance(mapping, dict):
        return ""
    value = mapping.get(name)
    if value is None:
        value = mapping.get(str(name), "")
    return value


def zero_int_helper(this: Any, value: Any) -> str:
    number = _to_number(value)
    return str(int(number)) if number is not None else "0"


def percent_helper(this: Any, part: Any, total: Any = None) -> str:
    """``{{percentHelper done total}}`` -> ``"42.50%"``."""
    a = _to_number(part)
    if a is None:
        return "0%"
    if total is None:
        return f"{a:.2f}%"
    b = _to_number(total)
    if not b:
        return "0%"
    return f"{a / b * 100:.2f}%"


def inspection_time_helper(this: Any, value: Any) -> Any:
    """ISO timestamp -> ``DD.MM.YYYY HH:MM``; anything else is returned as-is."""
    if _is_empty(value):
        return ""
    try:
        moment = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return value
    return moment.strftime(INSPECTION_TIME_FORMAT)


def pressure_helper(this: Any, systolic: Any, diastolic: Any) -> str:
    """Blood pressure as ``"120/80"``."""
    if _is_empty(systolic) or _is_empty(diastolic):
        return DASH
    return f"{systolic}/{diastolic}"


def dash_helper(this: Any, value: Any) -> Any:
    if _is_empty(value) or value == 0:
        return DASH
    return value


def allow_helper(this: Any, value: Any) -> str:
    return ALLOWED_LABEL if value else NOT_ALLOWED_LABEL


def upper_helper(this: Any, value: Any) -> str:
    return "" if value is None else str(value).upper()


def if_null_helper(this: Any, value: Any, fallback: Any = "") -> Any:
    return fallback if _is_empty(value) else value


def is_after_before_sheet_helper(
    this: Any,
    options: Dict[str, Any],
    index: Any,
    after: Any,
    before: Any,
):
    """
    ``{{#isAfterBeforeSheet @index 2 5}}...{{else}}...{{/isAfterBeforeSheet}}``

    Renders the block when ``after < index < before``.
    """
    i, lo, hi = _to_number(index), _to_number(after), _to_number(before)
    if i is not None and lo is not None and hi is not None and lo < i < hi:
        return options["fn"](this)
    return options["inverse"](this)


def _sum(values: Iterable[Any]) -> str:
    total = 0.0
    for value in values:
        number = _to_number(value)
        if number is not None:
            total += number
    return _format_number(float(total))


def summarize_helper(this: Any, row: Any, *fields: Any) -> str:
    """``{{summarize row "a" "b"}}``: sum of the named fields of one row."""
    if not isinstance(row, dict):
        return "0"
    return _sum(row.get(field) for field in fields)


def line_sum_rows_helper(this: Any, rows: Any, field: Any) -> str:
    """``{{lineSumRows rows "amount"}}``: column sum over a list of rows."""
    if not isinstance(rows, (list, tuple)):
        return "0"
    return _sum(row.get(field) for row in rows if isinstance(row, dict))


def face_id_not_found_name_helper(this: Any, value: Any) -> Any:
    return NOT_FOUND_NAME if _is_empty(value) else value


HELPERS: Dict[str, Callable[..., Any]] = {
    "math": math_helper,
    "key": key_helper,
    "zeroIntHelper": zero_int_helper,
    "percentHelper": percent_helper,
    "inspectionTimeHelper": inspection_time_helper,
    "dashHelper": dash_helper,
    "pressureHelper": pressure_helper,
    "allowHelper": allow_helper,
    "upper": upper_helper,
    "ifnull": if_null_helper,
    "isAfterBeforeSheet": is_after_before_sheet_helper,
    "summarize": summarize_helper,
    "lineSumRows": line_sum_rows_helper,
    "faceIdNotFoundName": face_id_not_found_name_helper,
}
