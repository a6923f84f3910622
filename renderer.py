"""
HTML-to-Excel renderer — CLI entry point.

Usage:
    python renderer.py <hbs_template> <data_json> <output_excel_file>

Renders a Handlebars template with a JSON data file into HTML, then
transcribes every <table> of that HTML into a sheet of the output .xlsx
workbook.  Batch size, debug mode, log level and px -> Excel unit
multipliers come from the environment (or a .env file).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import dotenv

from config.settings import RendererSettings, load_settings
from exceptions import RendererError
from templating.renderer import render_template
from transcription.table import TableTranscriber
from utils.memory import log_memory_usage, start_memory_tracking

__version__ = "1.2.0"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def _dump_debug_html(html: str, settings: RendererSettings) -> None:
    try:
        Path(settings.debug_html_path).write_text(html, encoding="utf-8")
        logger.info("Rendered html written to %s", settings.debug_html_path)
    except OSError:
        logger.warning(
            "Cant write debug file %s",
            settings.debug_html_path,
            exc_info=True,
        )


def run(
    template_path: str,
    data_path: str,
    output_path: str,
    settings: RendererSettings,
) -> str:
    """Render *template_path* with *data_path* and write *output_path*."""
    html = render_template(template_path, data_path)
    logger.info("Rendering Handlebars template to html is done")
    log_memory_usage("template rendered")

    if settings.debug_mode:
        _dump_debug_html(html, settings)

    result = TableTranscriber(settings).transcribe(html, output_path)
    log_memory_usage("workbook written")
    return result


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Render a Handlebars template with JSON data and convert its tables to .xlsx.",
    )
    parser.add_argument("template", help="Path to the Handlebars (.hbs) template")
    parser.add_argument("data", help="Path to the JSON data file")
    parser.add_argument("output", help="Path of the .xlsx file to write")
    args = parser.parse_args(argv)

    dotenv.load_dotenv()

    try:
        settings = load_settings()
    except RendererError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level_number)
    logger.info("html-to-excel-renderer v%s", __version__)
    if settings.debug_mode:
        logger.info("Debug mode is ON")

    start_memory_tracking()

    try:
        run(args.template, args.data, args.output, settings)
    except RendererError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except Exception:
        logger.exception("Failed to write %s", args.output)
        sys.exit(1)

    logger.info("All done")


if __name__ == "__main__":
    main()
