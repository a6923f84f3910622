"""
Handlebars template rendering (pybars3).

``render_template`` reads the JSON data file, compiles the template and
renders it with the custom helpers from ``templating.helpers``.  Every
failure is fatal and surfaces as a ``RendererError`` subclass.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pybars import Compiler

from exceptions import DataFileError, TemplateRenderError
from templating.helpers import HELPERS

logger = logging.getLogger(__name__)


def read_json_file(data_path: str) -> Dict[str, Any]:
    """Load the template context; it must be a non-empty JSON object."""
    path = Path(data_path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DataFileError(f"Cannot read data file {data_path}: {exc}") from exc

    if not raw.strip():
        raise DataFileError(f"File is empty? {data_path}")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DataFileError(
            f"Error reading data json file {data_path}! Can't deserialize json: {exc}"
        ) from exc

    if not isinstance(data, dict):
        raise DataFileError(
            f"Data file {data_path} must contain a JSON object, got {type(data).__name__}"
        )
    return data


def render_string(source: str, context: Dict[str, Any], name: str = "<string>") -> str:
    """Compile and render a template *source* against *context*."""
    try:
        template = Compiler().compile(source)
    except Exception as exc:
        raise TemplateRenderError(f"Error while parsing template {name}: {exc}") from exc

    try:
        return str(template(context, helpers=HELPERS))
    except Exception as exc:
        raise TemplateRenderError(f"Error applying template {name}: {exc}") from exc


def render_template(template_path: str, data_path: str) -> str:
    """Render the Handlebars template at *template_path* with *data_path*."""
    context = read_json_file(data_path)

    try:
        source = Path(template_path).read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateRenderError(f"Cannot read template {template_path}: {exc}") from exc

    html = render_string(source, context, name=template_path)
    logger.info(
        "Rendered template %s with %s (%d chars of HTML)",
        template_path,
        data_path,
        len(html),
    )
    return html
