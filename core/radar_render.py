# core/radar_render.py
"""
Draws a LayoutResult onto a matplotlib Figure.

The figure is the mount point: every render tears down whatever the previous
render left there (animation, hover handlers, artists) before drawing.
Axes span the whole figure with pixel data coordinates and y pointing down,
so layout coordinates are used as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, PathPatch, Rectangle, Wedge
from matplotlib.path import Path

from core.radar_config import RenderConfig
from core.radar_layout import LayoutResult, Outline, SeriesLayout, Vertex

logger = logging.getLogger(__name__)

# 1pt == 1px, font sizes and stroke widths from the config map straight onto the canvas
CHART_DPI = 72.0

GRID_COLOR = "#CDCDCD"
SPOKE_COLOR = "white"
TEXT_COLOR = "#000"
MARKER_OPACITY = 0.8
TOOLTIP_OFFSET = (10, 10)

# back-to-front paint order
Z_WEDGE = 1
Z_RING = 2
Z_RING_LABEL = 3
Z_SPOKE = 4
Z_AXIS_LABEL = 5
Z_FILL = 6
Z_OUTLINE = 7
Z_MARKER = 8
Z_HIT_TARGET = 9
Z_GROUP_LEGEND = 10
Z_DATASET_LEGEND = 11
Z_SWEEP = 12
Z_TOOLTIP = 13

LINE_STYLE_MAP = {"solid": "solid", "dashed": "dashed"}


class ChartMount:
    """A figure the chart is drawn into; holds at most one live chart."""

    def __init__(self, figure: Optional[Figure] = None, dpi: float = CHART_DPI):
        if figure is None:
            figure = Figure(dpi=dpi)
            FigureCanvasAgg(figure)
        self.figure = figure
        self.chart: Optional[RenderedChart] = None
        self.generation = 0

    def reset(self) -> None:
        if self.chart is not None:
            self.chart.dispose()
            self.chart = None
        self.figure.clear()
        self.generation += 1


@dataclass
class HitTarget:
    series: int
    vertex: Vertex
    patch: Circle


@dataclass
class RenderedChart:
    mount: ChartMount
    layout: LayoutResult
    config: RenderConfig
    ax: Any
    generation: int
    wedges: List[Wedge] = field(default_factory=list)
    rings: List[Circle] = field(default_factory=list)
    ring_labels: List[Any] = field(default_factory=list)
    spokes: List[Line2D] = field(default_factory=list)
    axis_labels: List[Any] = field(default_factory=list)
    fills: List[PathPatch] = field(default_factory=list)
    outlines: List[PathPatch] = field(default_factory=list)
    markers: List[List[Circle]] = field(default_factory=list)
    hit_targets: List[HitTarget] = field(default_factory=list)
    group_legend: List[Tuple[Rectangle, Any]] = field(default_factory=list)
    dataset_legend: List[Tuple[Rectangle, Any]] = field(default_factory=list)
    tooltip: Any = None
    hover: Optional["HoverController"] = None
    animator: Any = None

    @property
    def data_artists(self) -> list:
        out: list = [*self.fills, *self.outlines]
        for row in self.markers:
            out.extend(row)
        out.extend(t.patch for t in self.hit_targets)
        return out

    @property
    def is_current(self) -> bool:
        return self.mount.chart is self and self.mount.generation == self.generation

    def dispose(self) -> None:
        if self.animator is not None:
            self.animator.stop()
            self.animator = None
        if self.hover is not None:
            self.hover.disconnect()
            self.hover = None

    def redraw(self) -> None:
        self.mount.figure.canvas.draw_idle()


def outline_path(outline: Outline) -> Path:
    pts = list(outline.points)
    if outline.curved:
        codes = [Path.MOVETO] + [Path.CURVE4] * (len(pts) - 1) + [Path.CLOSEPOLY]
    else:
        codes = [Path.MOVETO] + [Path.LINETO] * (len(pts) - 1) + [Path.CLOSEPOLY]
    return Path(pts + [pts[0]], codes)


def _legend_row(ax, entry, fontsize, zorder):
    x, y = entry.position
    swatch = Rectangle((x, y), 12, 12, facecolor=entry.color, edgecolor="none", zorder=zorder)
    ax.add_patch(swatch)
    text = ax.text(
        *entry.text_position, entry.label, ha="left", va="baseline", fontsize=fontsize, color=TEXT_COLOR, zorder=zorder
    )
    return swatch, text


def _draw_series(ax, chart: RenderedChart, s: SeriesLayout, cfg: RenderConfig, px) -> None:
    path = outline_path(s.outline)
    fill = PathPatch(
        path, facecolor=s.color, edgecolor="none", alpha=cfg.opacity_area, zorder=Z_FILL, gid=f"fill-{s.index}"
    )
    outline = PathPatch(
        path,
        fill=False,
        edgecolor=s.color,
        linewidth=px(cfg.stroke_width),
        linestyle=LINE_STYLE_MAP[s.line_style],
        zorder=Z_OUTLINE,
        gid=f"outline-{s.index}",
    )
    ax.add_patch(fill)
    ax.add_patch(outline)
    chart.fills.append(fill)
    chart.outlines.append(outline)

    row = []
    for marker in s.markers:
        face = to_rgba(s.color, MARKER_OPACITY)
        dot = Circle(marker.position, marker.radius, facecolor=face, edgecolor="none", zorder=Z_MARKER)
        ax.add_patch(dot)
        row.append(dot)
    chart.markers.append(row)

    if cfg.tooltip:
        for marker, vertex in zip(s.markers, s.vertices):
            target = Circle(marker.position, marker.hit_radius, facecolor="none", edgecolor="none", zorder=Z_HIT_TARGET)
            ax.add_patch(target)
            chart.hit_targets.append(HitTarget(series=s.index, vertex=vertex, patch=target))


def render(mount: ChartMount, layout: LayoutResult, config: RenderConfig) -> RenderedChart:
    """Clear `mount` and paint the chart back to front. Returns handles to every drawn artist."""
    mount.reset()
    fig = mount.figure
    dpi = fig.get_dpi()

    def px(value):
        return value * 72.0 / dpi

    fig.set_size_inches(layout.canvas_width / dpi, layout.canvas_height / dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, layout.canvas_width)
    ax.set_ylim(layout.canvas_height, 0)
    ax.set_axis_off()

    chart = RenderedChart(mount=mount, layout=layout, config=config, ax=ax, generation=mount.generation)
    fontsize = px(config.font_size)

    for w in layout.wedges:
        patch = Wedge(
            w.center,
            w.radius,
            w.theta1,
            w.theta2,
            facecolor=w.color,
            edgecolor="none",
            alpha=config.wedge_opacity,
            zorder=Z_WEDGE,
        )
        ax.add_patch(patch)
        chart.wedges.append(patch)

    for ring in layout.rings:
        circle = Circle(
            layout.center,
            ring.radius,
            facecolor=to_rgba(GRID_COLOR, config.opacity_circles),
            edgecolor=GRID_COLOR,
            zorder=Z_RING,
        )
        ax.add_patch(circle)
        chart.rings.append(circle)
    for ring in layout.rings:
        chart.ring_labels.append(
            ax.text(
                *ring.label_position,
                ring.label,
                ha="left",
                va="center",
                fontsize=fontsize,
                color=TEXT_COLOR,
                zorder=Z_RING_LABEL,
            )
        )

    for spoke in layout.spokes:
        line = Line2D(
            [spoke.start[0], spoke.end[0]],
            [spoke.start[1], spoke.end[1]],
            color=SPOKE_COLOR,
            linewidth=px(2.0),
            zorder=Z_SPOKE,
        )
        ax.add_line(line)
        chart.spokes.append(line)

    for label in layout.labels:
        for line in label.lines:
            chart.axis_labels.append(
                ax.text(
                    *line.position,
                    line.text,
                    ha="center",
                    va="baseline",
                    fontsize=fontsize,
                    color=TEXT_COLOR,
                    zorder=Z_AXIS_LABEL,
                )
            )

    for s in layout.series:
        _draw_series(ax, chart, s, config, px)

    chart.group_legend = [_legend_row(ax, e, fontsize, Z_GROUP_LEGEND) for e in layout.group_legend]
    chart.dataset_legend = [_legend_row(ax, e, fontsize, Z_DATASET_LEGEND) for e in layout.dataset_legend]

    if config.tooltip:
        chart.tooltip = ax.annotate(
            "",
            xy=layout.center,
            xytext=TOOLTIP_OFFSET,
            textcoords="offset pixels",
            fontsize=fontsize,
            color="black",
            bbox=dict(boxstyle="round,pad=0.4", facecolor="white", edgecolor="#ccc"),
            zorder=Z_TOOLTIP,
        )
        set_tooltip_opacity(chart.tooltip, 0.0)
        chart.hover = HoverController(chart)

    mount.chart = chart
    logger.debug(
        "rendered radar chart: %d wedges, %d rings, %d series", len(chart.wedges), len(chart.rings), len(chart.fills)
    )
    return chart


def set_tooltip_opacity(tooltip, alpha: float) -> None:
    tooltip.set_alpha(alpha)
    patch = tooltip.get_bbox_patch()
    if patch is not None:
        patch.set_alpha(alpha)


def tooltip_text(vertex: Vertex, unit: str = "") -> str:
    text = f"{vertex.axis}\nScore: {vertex.score:g}{unit}"
    if vertex.explanation:
        text += f"\n{vertex.explanation}"
    return text


class HoverController:
    """Pointer hit-testing on the invisible marker targets: series emphasis + the single tooltip."""

    def __init__(self, chart: RenderedChart):
        self.chart = chart
        self.active: Optional[HitTarget] = None
        self.cid = chart.mount.figure.canvas.mpl_connect("motion_notify_event", self.on_motion)

    def disconnect(self) -> None:
        if self.cid is not None:
            self.chart.mount.figure.canvas.mpl_disconnect(self.cid)
            self.cid = None

    def hit_test(self, x: float, y: float) -> Optional[HitTarget]:
        animator = self.chart.animator
        if animator is not None and not animator.settled:
            # markers are still clipped by the sweep
            return None
        # later datasets sit on top
        for target in reversed(self.chart.hit_targets):
            if target.patch.contains_point((x, y)):
                return target
        return None

    def on_motion(self, event) -> None:
        if event.inaxes is not self.chart.ax:
            if self.active is not None:
                self.leave()
            return
        target = self.hit_test(event.x, event.y)
        if target is None:
            if self.active is not None:
                self.leave()
            return
        self.enter(target, (event.xdata, event.ydata))

    def enter(self, target: HitTarget, pointer) -> None:
        cfg = self.chart.config
        for i, fill in enumerate(self.chart.fills):
            fill.set_alpha(cfg.highlight_opacity if i == target.series else cfg.dim_opacity)
        tip = self.chart.tooltip
        tip.xy = pointer
        tip.set_text(tooltip_text(target.vertex, cfg.unit))
        set_tooltip_opacity(tip, 1.0)
        self.active = target
        self.chart.redraw()

    def leave(self) -> None:
        for fill in self.chart.fills:
            fill.set_alpha(self.chart.config.opacity_area)
        set_tooltip_opacity(self.chart.tooltip, 0.0)
        self.active = None
        self.chart.redraw()
