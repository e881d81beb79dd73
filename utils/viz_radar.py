# utils/viz_radar.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import matplotlib.pyplot as plt

from core.radar_animation import AnimationState, render_animated
from core.radar_config import resolve_config
from core.radar_layout import compute_layout
from core.radar_model import AxisDefinition, Dataset, Pillar, axes_from_pillars, pillar_colors
from core.radar_render import CHART_DPI, ChartMount, RenderedChart, render
from utils.text_wrap import TextMeasure

DEFAULT_SAVE_DPI = 144
GIF_FPS = 30


def draw_radar_chart(
    mount: ChartMount,
    axes: Sequence[AxisDefinition],
    datasets: Sequence[Dataset],
    group_colors: Mapping[str, str],
    options: Optional[Mapping[str, Any]] = None,
    *,
    animate: bool = False,
    measure: Optional[TextMeasure] = None,
) -> RenderedChart:
    """Resolve options, lay out and paint one chart into `mount` (replacing what was there)."""
    config = resolve_config(options)
    layout = compute_layout(axes, datasets, config, group_colors, measure=measure)
    if animate:
        return render_animated(mount, layout, config)
    return render(mount, layout, config)


def save_chart(chart: RenderedChart, out_path: Union[str, Path], *, dpi: int = DEFAULT_SAVE_DPI) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    suffix = out_path.suffix.lower()
    if suffix == ".gif":
        if chart.animator is None:
            raise ValueError("GIF output needs an animated chart (animate=True).")
        return chart.animator.save(out_path, fps=GIF_FPS)
    if chart.animator is not None:
        chart.animator.timeline.run_to_end()
    fig = chart.mount.figure
    if suffix == ".svg":
        fig.savefig(out_path)
    else:
        fig.savefig(out_path, dpi=dpi)
    return out_path


def radar_chart(
    pillars: Sequence[Pillar],
    datasets: Sequence[Dataset],
    out_path: Optional[Union[str, Path]] = None,
    *,
    options: Optional[Mapping[str, Any]] = None,
    animate: bool = False,
    dpi: int = DEFAULT_SAVE_DPI,
    show: bool = False,
    measure: Optional[TextMeasure] = None,
) -> RenderedChart:
    """One call: pillars + datasets -> chart, optionally written to .png/.svg/.gif and/or shown."""
    fig = plt.figure(dpi=CHART_DPI) if show else None
    mount = ChartMount(fig)
    chart = draw_radar_chart(
        mount, axes_from_pillars(pillars), datasets, pillar_colors(pillars), options, animate=animate, measure=measure
    )
    if out_path is not None:
        save_chart(chart, out_path, dpi=dpi)
    if show:
        if chart.animator is not None and chart.animator.state is AnimationState.IDLE:
            chart.animator.play()
        plt.show()
        plt.close(fig)
    return chart
