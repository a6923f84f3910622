"""Handlebars rendering of report templates."""

from templating.helpers import HELPERS
from templating.renderer import read_json_file, render_string, render_template

__all__ = ["HELPERS", "read_json_file", "render_string", "render_template"]
