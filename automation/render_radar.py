# automation/render_radar.py
# -*- coding: utf-8 -*-
"""
Render a radar chart from a JSON description.

  python -m automation.render_radar chart.json --out outputs/figures/radar.svg
  python -m automation.render_radar chart.json --out radar.png --out radar.gif --animate

JSON layout:
  {
    "pillars":  [{"name": "...", "color": "#F3467C", "axes": ["...", ...]}, ...],
    "datasets": [{"name": "...", "data": [{"axis": "...", "value": 7, "explanation": "..."}]}
                 or {"name": "...", "points": {"axis": 7}}],
    "options":  {"levels": 5, "max_value": 8, "format": ".1f", "colors": [...], "styles": [...], ...}
  }
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

# headless before pyplot is imported anywhere
os.environ.setdefault("MPLBACKEND", "Agg")

from core.errors import DatasetError, RadarChartError  # noqa: E402
from core.radar_model import Dataset, Pillar, dataset_from_records  # noqa: E402
from utils.io_compat import print_safe, setup_stdout_utf8  # noqa: E402
from utils.viz_radar import radar_chart, save_chart  # noqa: E402


def load_document(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Top-level JSON must be an object: {path.name}")
    return data


def parse_pillars(rows: Sequence[Dict[str, Any]]) -> List[Pillar]:
    try:
        return [Pillar(name=r["name"], color=r["color"], axes=tuple(r["axes"])) for r in rows]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Each pillar needs name, color and axes: {e}") from e


def parse_datasets(rows: Sequence[Dict[str, Any]]) -> List[Dataset]:
    out = []
    for i, r in enumerate(rows):
        try:
            if "data" in r:
                out.append(dataset_from_records(r["name"], r["data"]))
            else:
                out.append(Dataset(name=r["name"], points=r.get("points", {}), explanations=r.get("explanations", {})))
        except (KeyError, TypeError, AttributeError) as e:
            raise DatasetError(f"Dataset #{i + 1} needs a name and points or data: {e!r}") from e
    return out


def parse_options(raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """JSON cannot carry callables: turn format/colors/styles into the functions the config expects."""
    options = dict(raw or {})
    fmt = options.pop("format", None)
    if fmt is not None:
        options["format"] = lambda v, spec=fmt: format(v, spec)
    colors = options.pop("colors", None)
    if colors:
        options["color"] = lambda i, c=tuple(colors): c[i % len(c)]
    styles = options.pop("styles", None)
    if styles:
        options["style"] = lambda i, s=tuple(styles): s[i % len(s)]
    return options


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Render a pillar radar chart from JSON.")
    ap.add_argument("input", type=Path, help="chart description (.json)")
    ap.add_argument("--out", type=Path, action="append", default=[], help="output file (.svg/.png/.gif), repeatable")
    ap.add_argument("--animate", action="store_true", help="attach the sweep reveal (required for .gif)")
    ap.add_argument("--dpi", type=int, default=144)
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_stdout_utf8()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        doc = load_document(args.input)
        pillars = parse_pillars(doc.get("pillars", []))
        datasets = parse_datasets(doc.get("datasets", []))
        options = parse_options(doc.get("options"))
        chart = radar_chart(pillars, datasets, options=options, animate=args.animate)
        written = []
        # gif first: it plays the timeline from the start
        for out in sorted(args.out, key=lambda p: p.suffix.lower() != ".gif"):
            written.append(save_chart(chart, out, dpi=args.dpi))
    except (OSError, ValueError, RadarChartError) as e:
        print_safe(f"❌ {args.input}: {e}")
        return 1

    print_safe(f"✅ {len(chart.layout.wedges)} axes, {len(chart.layout.series)} datasets")
    for p in written:
        print_safe(f"💾 {p}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
