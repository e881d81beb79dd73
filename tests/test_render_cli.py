import json

import pytest

from automation.render_radar import main, parse_options

SMALL = {"width": 240, "height": 240, "margin": {"top": 30, "right": 30, "bottom": 30, "left": 30}}


@pytest.fixture
def chart_json(tmp_path):
    doc = {
        "pillars": [
            {"name": "Powerful Practice", "color": "#F3467C", "axes": ["Thematic Units", "Session Structure"]},
            {"name": "Streamlined Systems", "color": "#00ADBB", "axes": ["Paperwork"]},
        ],
        "datasets": [
            {"name": "Baseline", "data": [{"axis": "Thematic Units", "value": 2, "explanation": "ad hoc"}]},
            {"name": "Current", "points": {"Thematic Units": 7, "Paperwork": 8}},
        ],
        "options": {**SMALL, "format": ".1f", "styles": ["solid", "dashed"]},
    }
    path = tmp_path / "chart.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


def test_cli_writes_svg_and_png(chart_json, tmp_path, capsys):
    svg, png = tmp_path / "out" / "radar.svg", tmp_path / "out" / "radar.png"
    assert main([str(chart_json), "--out", str(svg), "--out", str(png), "--dpi", "72"]) == 0
    assert svg.exists() and png.exists()
    out = capsys.readouterr().out
    assert "3 axes, 2 datasets" in out


def test_cli_writes_animated_gif(chart_json, tmp_path):
    gif = tmp_path / "radar.gif"
    assert main([str(chart_json), "--animate", "--out", str(gif)]) == 0
    assert gif.read_bytes()[:3] == b"GIF"


def test_cli_gif_needs_animation(chart_json, tmp_path, capsys):
    assert main([str(chart_json), "--out", str(tmp_path / "radar.gif")]) == 1
    assert "animate" in capsys.readouterr().out


def test_cli_reports_bad_configuration(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(
        json.dumps({"pillars": [{"name": "P", "color": "red", "axes": ["A"]}], "options": {"levels": 0}}),
        encoding="utf-8",
    )
    assert main([str(path)]) == 1
    assert "levels" in capsys.readouterr().out


def test_cli_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == 1


def test_parse_options_builds_callables():
    opts = parse_options({"format": ".2f", "colors": ["red", "blue"], "styles": ["dashed"], "levels": 3})
    assert opts["format"](1) == "1.00"
    assert opts["color"](3) == "blue"
    assert opts["style"](5) == "dashed"
    assert opts["levels"] == 3


@pytest.mark.parametrize(
    "dataset",
    [
        {"points": {"A": 1}},
        {"name": "X", "points": [1, 2]},
        {"name": "X", "data": [1, 2]},
        "just a name",
    ],
)
def test_cli_reports_malformed_datasets(tmp_path, capsys, dataset):
    path = tmp_path / "bad.json"
    doc = {"pillars": [{"name": "P", "color": "red", "axes": ["A"]}], "datasets": [dataset]}
    path.write_text(json.dumps(doc), encoding="utf-8")
    assert main([str(path)]) == 1
    out = capsys.readouterr().out
    assert "❌" in out
    assert "Dataset" in out
