"""
Error types raised by the rendering pipeline.

Everything that derives from ``RendererError`` is fatal for a run: the CLI
logs it with its context and exits non-zero without writing a workbook.
Per-cell problems (bad style values, missing images, ...) are never raised,
they are logged where they happen.
"""


class RendererError(Exception):
    """Base class for fatal pipeline errors."""


class SettingsError(RendererError):
    """Environment / .env configuration could not be parsed."""


class DataFileError(RendererError):
    """The JSON data file is missing, empty or not a JSON object."""


class TemplateRenderError(RendererError):
    """The Handlebars template could not be compiled or rendered."""


class HtmlParseError(RendererError):
    """The rendered HTML could not be parsed into a document tree."""
