"""Tests for the command-line entry point."""

from __future__ import annotations

import json

import openpyxl
import pytest

import renderer

_ENV_VARS = (
    "BATCH_SIZE",
    "DEBUG_MODE",
    "LOG_LEVEL",
    "PX_TO_EXCEL_WIDTH_MULTIPLIER",
    "PX_TO_EXCEL_HEIGHT_MULTIPLIER",
    "DEBUG_HTML_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(renderer.dotenv, "load_dotenv", lambda *a, **kw: False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def inputs(tmp_path):
    template = tmp_path / "report.hbs"
    template.write_text(
        "<html><body>"
        '<table data-name="{{title}}">'
        '<thead><tr><th style="width: 70px">Name</th><th style="value-type: float">{{limit}}</th></tr></thead>'
        "{{#each rows}}<tr><td>{{upper name}}</td><td>{{dashHelper score}}</td></tr>{{/each}}"
        "</table></body></html>",
        encoding="utf-8",
    )
    data = tmp_path / "data.json"
    data.write_text(
        json.dumps({"title": "Staff", "limit": 1.5, "rows": [{"name": "ann", "score": 3}, {"name": "bob"}]})
    )
    return template, data


def test_main_writes_workbook(inputs, tmp_path) -> None:
    template, data = inputs
    out = tmp_path / "out.xlsx"

    renderer.main([str(template), str(data), str(out)])

    ws = openpyxl.load_workbook(out)["Staff"]
    assert [[c.value for c in row] for row in ws.iter_rows()] == [
        ["Name", 1.5],
        ["ANN", "3"],
        ["BOB", "-"],
    ]
    assert ws.column_dimensions["A"].width == pytest.approx(9.8)


def test_debug_mode_dumps_html(inputs, tmp_path, monkeypatch) -> None:
    template, data = inputs
    dump = tmp_path / "debug.html"
    monkeypatch.setenv("DEBUG_MODE", "1")
    monkeypatch.setenv("DEBUG_HTML_PATH", str(dump))

    renderer.main([str(template), str(data), str(tmp_path / "out.xlsx")])

    assert '<table data-name="Staff">' in dump.read_text(encoding="utf-8")


def test_missing_data_file_exits_non_zero(inputs, tmp_path) -> None:
    template, _ = inputs
    out = tmp_path / "out.xlsx"

    with pytest.raises(SystemExit) as exc_info:
        renderer.main([str(template), str(tmp_path / "missing.json"), str(out)])

    assert exc_info.value.code == 1
    assert not out.exists()


def test_invalid_settings_exit_non_zero(inputs, tmp_path, monkeypatch) -> None:
    template, data = inputs
    monkeypatch.setenv("BATCH_SIZE", "lots")

    with pytest.raises(SystemExit) as exc_info:
        renderer.main([str(template), str(data), str(tmp_path / "out.xlsx")])

    assert exc_info.value.code == 1


def test_wrong_argument_count_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        renderer.main(["only-one"])

    assert exc_info.value.code == 2
