"""
Process-wide settings, read once from the environment.

``dotenv.load_dotenv()`` is called by the CLI before ``load_settings()``, so
values can come from a ``.env`` file as well as from the real environment.
The resulting ``RendererSettings`` is frozen and handed explicitly to the
components that need it.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from exceptions import SettingsError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# env var -> field name
_ENV_FIELDS = {
    "BATCH_SIZE": "batch_size",
    "DEBUG_MODE": "debug_mode",
    "LOG_LEVEL": "log_level",
    "PX_TO_EXCEL_WIDTH_MULTIPLIER": "px_to_excel_width_multiplier",
    "PX_TO_EXCEL_HEIGHT_MULTIPLIER": "px_to_excel_height_multiplier",
    "DEBUG_HTML_PATH": "debug_html_path",
}


class RendererSettings(BaseModel):
    """Immutable runtime configuration."""

    model_config = ConfigDict(frozen=True)

    batch_size: int = Field(default=500, ge=1)
    debug_mode: bool = False
    log_level: str = "INFO"
    # One Excel column-width unit is roughly one "0" glyph, ~7px.
    px_to_excel_width_multiplier: float = Field(default=0.14, gt=0)
    # Row heights are in points: 1px == 0.75pt at 96 dpi.
    px_to_excel_height_multiplier: float = Field(default=0.75, gt=0)
    debug_html_path: str = "rendered.html"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        level = str(value or "").strip().upper()
        if level not in _LOG_LEVELS:
            logger.warning("Cannot parse log level %r, default to INFO", value)
            return "INFO"
        return level

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> RendererSettings:
    """
    Build ``RendererSettings`` from *environ* (default: ``os.environ``).

    Unset or blank variables keep their defaults.  Raises ``SettingsError``
    when a value cannot be converted.
    """
    env = os.environ if environ is None else environ

    values = {}
    for var, field in _ENV_FIELDS.items():
        raw = env.get(var)
        if raw is None or not raw.strip():
            continue
        values[field] = raw.strip()

    try:
        return RendererSettings(**values)
    except ValidationError as exc:
        raise SettingsError(f"Invalid renderer settings: {exc}") from exc
