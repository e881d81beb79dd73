# core/radar_model.py
"""
Input model for the radar chart engine.

- AxisDefinition / Pillar describe the fixed, ordered category layout
- Dataset holds one named series of scores (axis -> number)
- score_matrix() lines every dataset up against the axis order, missing -> 0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

import pandas as pd
from matplotlib.colors import is_color_like, to_hex

from core.errors import AxisGroupError, ConfigurationError, DatasetError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisDefinition:
    name: str
    group_name: str


@dataclass(frozen=True)
class Pillar:
    """A named group of axes sharing one colour (background wedges + group legend)."""

    name: str
    color: str
    axes: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "axes", tuple(self.axes))
        object.__setattr__(self, "color", normalize_color(self.color, what=f"pillar {self.name!r}"))


@dataclass(frozen=True)
class Dataset:
    """One series: axis name -> score, plus optional tooltip text per axis."""

    name: str
    points: Mapping[str, float] = field(default_factory=dict)
    explanations: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for what in ("points", "explanations"):
            if not isinstance(getattr(self, what), Mapping):
                raise DatasetError(
                    f"Dataset {self.name!r}: {what} must map axis names, got {type(getattr(self, what)).__name__}"
                )
        clean: Dict[str, float] = {}
        for axis, value in self.points.items():
            if isinstance(value, bool) or not isinstance(value, Real):
                raise DatasetError(f"Dataset {self.name!r}: score for {axis!r} is not a number: {value!r}")
            # NaN is allowed and means "no score"
            if math.isinf(value) or value < 0:
                raise DatasetError(f"Dataset {self.name!r}: score for {axis!r} must be finite and >= 0, got {value!r}")
            clean[str(axis)] = float(value)
        object.__setattr__(self, "points", MappingProxyType(clean))
        object.__setattr__(self, "explanations", MappingProxyType(dict(self.explanations)))


def normalize_color(value: Any, *, what: str = "color") -> str:
    if not is_color_like(value):
        raise ConfigurationError(f"Invalid {what}: {value!r}")
    return to_hex(value, keep_alpha=False)


def axes_from_pillars(pillars: Sequence[Pillar]) -> List[AxisDefinition]:
    """Flatten pillars into the ordered axis list; every axis must belong to exactly one pillar."""
    axes: List[AxisDefinition] = []
    owner: Dict[str, str] = {}
    for pillar in pillars:
        for name in pillar.axes:
            if name in owner:
                raise AxisGroupError(f"Axis {name!r} is listed in both {owner[name]!r} and {pillar.name!r}")
            owner[name] = pillar.name
            axes.append(AxisDefinition(name=name, group_name=pillar.name))
    if not axes:
        raise AxisGroupError("Radar chart needs at least one axis.")
    return axes


def pillar_colors(pillars: Iterable[Pillar]) -> Dict[str, str]:
    return {p.name: p.color for p in pillars}


def dataset_from_records(name: str, records: Iterable[Mapping[str, Any]]) -> Dataset:
    """Build a Dataset from `[{"axis": ..., "value": ..., "explanation": ...}, ...]` rows."""
    points: Dict[str, Any] = {}
    explanations: Dict[str, str] = {}
    for row in records:
        try:
            axis = row["axis"]
            value = row["value"]
        except (KeyError, TypeError) as e:
            raise DatasetError(f"Dataset {name!r}: record needs 'axis' and 'value': {row!r}") from e
        points[axis] = value
        if row.get("explanation"):
            explanations[axis] = str(row["explanation"])
    return Dataset(name=name, points=points, explanations=explanations)


def score_matrix(axes: Sequence[AxisDefinition], datasets: Sequence[Dataset]) -> pd.DataFrame:
    """
    Rows = datasets (input order), columns = axis names (axis order).
    Scores for axes the chart does not show are dropped; missing/NaN scores become 0.0.
    """
    names = [a.name for a in axes]
    known = set(names)
    for ds in datasets:
        extra = sorted(set(ds.points) - known)
        if extra:
            logger.warning("Dataset %r has scores for unknown axes %s; ignoring them", ds.name, extra)
    rows = [pd.Series(dict(ds.points), dtype="float64") for ds in datasets]
    frame = pd.DataFrame(rows, columns=names, dtype="float64")
    frame = frame.reindex(columns=names).fillna(0.0)
    frame.index = pd.RangeIndex(len(datasets))
    return frame
