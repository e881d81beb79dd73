# core/radar_layout.py
"""
Radar chart geometry.

compute_layout() turns (axes, datasets, config, group colours) into absolute
canvas coordinates for every element the renderer draws. Pure: no drawing,
no mutation of the inputs, same inputs -> identical numbers.

Conventions:
- canvas origin top-left, y grows downward (SVG style)
- angles in radians, measured with cos/sin in canvas space, so -pi/2 points up
  and increasing angles run clockwise on screen
- N axes -> 2N slots; even slots are visible (spoke + label), odd slots hold
  the data vertices, halfway between two labelled spokes
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np

from core.errors import AxisGroupError
from core.radar_config import RenderConfig
from core.radar_model import AxisDefinition, Dataset, normalize_color, score_matrix
from utils.text_wrap import TextMeasure, font_measure, wrap_label

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

SPOKE_OVERSHOOT = 1.1
HIT_TARGET_FACTOR = 1.5
LINE_HEIGHT_EM = 1.4
FIRST_LINE_EM = 0.35
RING_LABEL_DX = 4.0
LEGEND_SWATCH = 12.0
GROUP_LEGEND_STEP = 150.0
DATASET_LEGEND_STEP = 25.0
LEGEND_GAP = 20.0


@dataclass(frozen=True)
class Slot:
    index: int
    angle: float
    visible: bool
    axis: str


@dataclass(frozen=True)
class Ring:
    level: int
    radius: float
    value: float
    label: str
    label_position: Point


@dataclass(frozen=True)
class Spoke:
    slot: int
    axis: str
    angle: float
    start: Point
    end: Point


@dataclass(frozen=True)
class LabelLine:
    text: str
    position: Point


@dataclass(frozen=True)
class AxisLabel:
    axis: str
    slot: int
    angle: float
    anchor: Point
    lines: Tuple[LabelLine, ...]


@dataclass(frozen=True)
class Wedge:
    axis: str
    group: str
    color: str
    center: Point
    radius: float
    start_angle: float
    end_angle: float

    @property
    def theta1(self) -> float:
        return math.degrees(self.start_angle)

    @property
    def theta2(self) -> float:
        return math.degrees(self.end_angle)


@dataclass(frozen=True)
class Vertex:
    axis: str
    score: float
    angle: float
    radius: float
    position: Point
    explanation: Optional[str] = None


@dataclass(frozen=True)
class Marker:
    axis: str
    position: Point
    radius: float
    hit_radius: float


@dataclass(frozen=True)
class Outline:
    """
    Closed perimeter. Straight: one point per vertex (polyline, closed).
    Curved: start point followed by (control1, control2, end) triples of cubic Bezier segments.
    """

    points: Tuple[Point, ...]
    curved: bool


@dataclass(frozen=True)
class SeriesLayout:
    index: int
    name: str
    color: str
    line_style: str
    vertices: Tuple[Vertex, ...]
    markers: Tuple[Marker, ...]
    outline: Outline


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str
    position: Point
    text_position: Point


@dataclass(frozen=True)
class LayoutResult:
    canvas_width: float
    canvas_height: float
    center: Point
    radius: float
    max_value: float
    angle_step: float
    rotation: float
    slots: Tuple[Slot, ...]
    rings: Tuple[Ring, ...]
    spokes: Tuple[Spoke, ...]
    labels: Tuple[AxisLabel, ...]
    wedges: Tuple[Wedge, ...]
    series: Tuple[SeriesLayout, ...]
    group_legend: Tuple[LegendEntry, ...]
    dataset_legend: Tuple[LegendEntry, ...]

    def scale(self, value: float) -> float:
        """Linear score -> radius mapping, [0, max_value] -> [0, radius]."""
        return value / self.max_value * self.radius

    @property
    def sweep_radius(self) -> float:
        return self.radius * SPOKE_OVERSHOOT


@dataclass(frozen=True)
class SweepRegion:
    """Clip sector opened clockwise from the top of the chart by `sweep_degrees`."""

    center: Point
    radius: float
    start_degrees: float
    sweep_degrees: float

    @property
    def is_full(self) -> bool:
        return self.sweep_degrees >= 360.0

    @property
    def end_degrees(self) -> float:
        return self.start_degrees + min(self.sweep_degrees, 360.0)


def sweep_region(layout: LayoutResult, sweep_degrees: float) -> SweepRegion:
    sweep = min(max(float(sweep_degrees), 0.0), 360.0)
    start = math.degrees(layout.rotation - math.pi / 2)
    return SweepRegion(layout.center, layout.sweep_radius, start, sweep)


def _polar(center: Point, radius: float, angle: float) -> Point:
    return (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))


def cardinal_closed(points: np.ndarray, tension: float = 0.0) -> np.ndarray:
    """
    Closed cardinal spline through `points` (n x 2) as cubic Bezier control points:
    [p0, c1, c2, p1, c1, c2, p2, ..., c1, c2, p0].
    """
    k = (1.0 - tension) / 6.0
    prev = np.roll(points, 1, axis=0)
    nxt = np.roll(points, -1, axis=0)
    nxt2 = np.roll(points, -2, axis=0)
    c1 = points + k * (nxt - prev)
    c2 = nxt - k * (nxt2 - points)
    segments = np.stack([c1, c2, nxt], axis=1).reshape(-1, 2)
    return np.vstack([points[:1], segments])


def _as_points(arr: np.ndarray) -> Tuple[Point, ...]:
    return tuple((float(x), float(y)) for x, y in arr)


def compute_layout(
    axes: Sequence[AxisDefinition],
    datasets: Sequence[Dataset],
    config: RenderConfig,
    group_colors: Mapping[str, str],
    *,
    measure: Optional[TextMeasure] = None,
) -> LayoutResult:
    if not axes:
        raise AxisGroupError("Radar chart needs at least one axis.")
    colors = {name: normalize_color(c, what=f"colour of group {name!r}") for name, c in group_colors.items()}
    missing = [a.name for a in axes if a.group_name not in colors]
    if missing:
        raise AxisGroupError(f"No group colour for axes {missing}")
    measure = measure or font_measure(config.font_size)

    n = len(axes)
    step = 2 * math.pi / (2 * n)
    rotation = math.radians(config.rotation_degrees)
    offset = math.radians(config.angle_offset_degrees)
    canvas_w, canvas_h = config.canvas_size
    center = (canvas_w / 2, canvas_h / 2)
    radius = config.radius
    logger.debug("radar layout: %d axes, %d datasets, radius=%.1f", n, len(datasets), radius)

    def scale(value):
        return value / config.max_value * radius

    def slot_angle(slot):
        return slot * step - math.pi / 2 + rotation

    slots = tuple(
        Slot(index=i, angle=slot_angle(i), visible=i % 2 == 0, axis=axes[i // 2].name) for i in range(2 * n)
    )

    rings = []
    for level in range(1, config.levels + 1):
        r = radius * level / config.levels
        value = config.max_value * level / config.levels
        rings.append(
            Ring(
                level=level,
                radius=r,
                value=value,
                label=config.format(value),
                label_position=(center[0] + RING_LABEL_DX, center[1] - r),
            )
        )

    spoke_len = scale(config.max_value * SPOKE_OVERSHOOT)
    label_r = scale(config.max_value * config.label_factor)
    spokes, labels = [], []
    for slot in slots:
        if not slot.visible:
            continue
        spokes.append(Spoke(slot.index, slot.axis, slot.angle, center, _polar(center, spoke_len, slot.angle)))
        anchor = _polar(center, label_r, slot.angle)
        lines = wrap_label(slot.axis, config.wrap_width, measure)
        labels.append(
            AxisLabel(
                axis=slot.axis,
                slot=slot.index,
                angle=slot.angle,
                anchor=anchor,
                lines=tuple(
                    LabelLine(text, (anchor[0], anchor[1] + (FIRST_LINE_EM + LINE_HEIGHT_EM * k) * config.font_size))
                    for k, text in enumerate(lines)
                ),
            )
        )

    wedges = tuple(
        Wedge(
            axis=a.name,
            group=a.group_name,
            color=colors[a.group_name],
            center=center,
            radius=radius,
            start_angle=slot_angle(2 * i),
            end_angle=slot_angle(2 * i + 2),
        )
        for i, a in enumerate(axes)
    )

    scores = score_matrix(axes, datasets).to_numpy(dtype=float)
    vertex_angles = np.arange(n) * 2 * step + step + offset - math.pi / 2 + rotation
    styles = config.encoding().resolve(len(datasets))
    series = []
    for idx, ds in enumerate(datasets):
        radii = scores[idx] / config.max_value * radius
        xy = np.column_stack([center[0] + radii * np.cos(vertex_angles), center[1] + radii * np.sin(vertex_angles)])
        vertices = tuple(
            Vertex(
                axis=a.name,
                score=float(scores[idx, i]),
                angle=float(vertex_angles[i]),
                radius=float(radii[i]),
                position=(float(xy[i, 0]), float(xy[i, 1])),
                explanation=ds.explanations.get(a.name),
            )
            for i, a in enumerate(axes)
        )
        markers = tuple(
            Marker(v.axis, v.position, config.dot_radius, config.dot_radius * HIT_TARGET_FACTOR) for v in vertices
        )
        if config.round_strokes:
            outline = Outline(_as_points(cardinal_closed(xy, config.curve_tension)), curved=True)
        else:
            outline = Outline(_as_points(xy), curved=False)
        series.append(
            SeriesLayout(
                index=idx,
                name=ds.name,
                color=styles[idx].color,
                line_style=styles[idx].line_style,
                vertices=vertices,
                markers=markers,
                outline=outline,
            )
        )

    m = config.margin
    group_legend = tuple(
        LegendEntry(
            label=name,
            color=color,
            position=(m.left + GROUP_LEGEND_STEP * i, config.height + m.top + LEGEND_GAP),
            text_position=(
                m.left + GROUP_LEGEND_STEP * i + LEGEND_SWATCH + 6,
                config.height + m.top + LEGEND_GAP + LEGEND_SWATCH,
            ),
        )
        for i, (name, color) in enumerate(colors.items())
    )
    dataset_legend = tuple(
        LegendEntry(
            label=s.name,
            color=s.color,
            position=(config.width + m.left + LEGEND_GAP, m.top + DATASET_LEGEND_STEP * i),
            text_position=(
                config.width + m.left + LEGEND_GAP + LEGEND_SWATCH + 6,
                m.top + DATASET_LEGEND_STEP * i + LEGEND_SWATCH,
            ),
        )
        for i, s in enumerate(series)
    )

    return LayoutResult(
        canvas_width=canvas_w,
        canvas_height=canvas_h,
        center=center,
        radius=radius,
        max_value=config.max_value,
        angle_step=step,
        rotation=rotation,
        slots=slots,
        rings=tuple(rings),
        spokes=tuple(spokes),
        labels=tuple(labels),
        wedges=wedges,
        series=tuple(series),
        group_legend=group_legend,
        dataset_legend=dataset_legend,
    )
