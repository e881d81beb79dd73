# core/radar_animation.py
"""
Two-phase sweep reveal for a rendered radar chart.

Timeline is a small fixed-duration tween scheduler (no easing, no rewind).
SweepAnimator is one consumer of it: a rotating sweep line drives one clip
sector over the pillar wedges (phase 1) and a second, independent clip sector
over the data polygons and markers (phase 2). Rings grow and spokes fade in
alongside phase 1. When the timeline ends both clips are full circles.

The host's frame loop only has to call Timeline.seek()/advance(); play() does
that with matplotlib's FuncAnimation.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Protocol

from matplotlib.animation import FuncAnimation, PillowWriter
from matplotlib.lines import Line2D
from matplotlib.patches import Wedge

from core.radar_config import RenderConfig
from core.radar_layout import LayoutResult, SweepRegion, sweep_region
from core.radar_render import Z_SWEEP, ChartMount, RenderedChart, render

logger = logging.getLogger(__name__)

DEFAULT_FPS = 60


@dataclass
class Tween:
    start: float
    duration: float
    on_progress: Callable[[float], None]
    on_complete: Optional[Callable[[], None]] = None
    progress: float = -1.0
    done: bool = False

    @property
    def end(self) -> float:
        return self.start + self.duration


class TweenScheduler(Protocol):
    def schedule(
        self,
        duration: float,
        on_progress: Callable[[float], None],
        on_complete: Optional[Callable[[], None]] = None,
        *,
        at: Optional[float] = None,
    ) -> Tween: ...


class Timeline:
    """Tweens placed on one clock. Without `at`, a tween starts where the timeline currently ends."""

    def __init__(self):
        self.tweens: List[Tween] = []
        self.time = 0.0
        self.cancelled = False

    @property
    def duration(self) -> float:
        return max((t.end for t in self.tweens), default=0.0)

    @property
    def finished(self) -> bool:
        return all(t.done for t in self.tweens)

    def schedule(self, duration, on_progress, on_complete=None, *, at=None) -> Tween:
        start = self.duration if at is None else float(at)
        if duration < 0 or start < 0:
            raise ValueError(f"Tween needs duration >= 0 and start >= 0 (got {duration}, {start})")
        tween = Tween(start=start, duration=float(duration), on_progress=on_progress, on_complete=on_complete)
        self.tweens.append(tween)
        return tween

    def seek(self, t: float) -> None:
        if self.cancelled:
            return
        if t < self.time:
            raise ValueError(f"Timeline only moves forward (at {self.time}, asked for {t})")
        self.time = t
        for tween in sorted(self.tweens, key=lambda tw: tw.start):
            if tween.done or t < tween.start:
                continue
            p = 1.0 if tween.duration == 0 else min((t - tween.start) / tween.duration, 1.0)
            if p != tween.progress:
                tween.progress = p
                tween.on_progress(p)
            if p >= 1.0:
                tween.done = True
                if tween.on_complete is not None:
                    tween.on_complete()

    def advance(self, dt: float) -> None:
        self.seek(self.time + dt)

    def run_to_end(self) -> None:
        self.seek(max(self.duration, self.time))

    def cancel(self) -> None:
        self.cancelled = True


class AnimationState(enum.Enum):
    IDLE = "idle"
    SWEEPING_WEDGES = "sweeping_wedges"
    SWEEPING_DATA = "sweeping_data"
    SETTLED = "settled"


class SweepAnimator:
    def __init__(self, chart: RenderedChart, timeline: Optional[Timeline] = None):
        self.chart = chart
        self.layout: LayoutResult = chart.layout
        self.config: RenderConfig = chart.config
        self.timeline = timeline if timeline is not None else Timeline()
        self.state = AnimationState.IDLE
        self._animation: Optional[FuncAnimation] = None

        ax = chart.ax
        self.wedge_region = sweep_region(self.layout, 0.0)
        self.data_region = sweep_region(self.layout, 0.0)
        self.wedge_clip = self._clip_patch(ax, self.wedge_region)
        self.data_clip = self._clip_patch(ax, self.data_region)
        for patch in chart.wedges:
            patch.set_clip_path(self.wedge_clip)
        for artist in chart.data_artists:
            artist.set_clip_path(self.data_clip)

        cx, cy = self.layout.center
        self.sweep_line = Line2D([cx, cx], [cy, cy], color="black", linewidth=2.0, zorder=Z_SWEEP)
        ax.add_line(self.sweep_line)
        self._point_sweep_line(0.0)

        for circle in chart.rings:
            circle.set_radius(0.0)
        for line in chart.spokes:
            line.set_alpha(0.0)

        self._schedule()
        chart.animator = self

    @staticmethod
    def _clip_patch(ax, region: SweepRegion) -> Wedge:
        return Wedge(region.center, region.radius, region.start_degrees, region.end_degrees, transform=ax.transData)

    def _schedule(self) -> None:
        cfg, tl = self.config, self.timeline
        for k, ring in enumerate(self.layout.rings):
            tl.schedule(cfg.ring_duration, partial(self._grow_ring, k, ring.radius), at=k * cfg.ring_stagger)
        tl.schedule(cfg.sweep_duration, self._sweep_wedges, at=0.0)
        for j, spoke in enumerate(self.layout.spokes):
            delay = (spoke.slot * self.layout.angle_step) / (2 * math.pi) * cfg.sweep_duration
            tl.schedule(cfg.spoke_fade, partial(self._fade_spoke, j), at=delay)
        tl.schedule(cfg.data_sweep_duration, self._sweep_data, at=cfg.sweep_duration)
        tl.schedule(cfg.sweep_fade, self._fade_sweep_line)
        tl.schedule(0.0, lambda p: None, on_complete=self.settle)
        logger.debug("sweep timeline scheduled: %d tweens, %.2fs", len(tl.tweens), tl.duration)

    # ---- tween consumers ----
    def _grow_ring(self, k: int, radius: float, p: float) -> None:
        self.chart.rings[k].set_radius(radius * p)

    def _fade_spoke(self, j: int, p: float) -> None:
        self.chart.spokes[j].set_alpha(p)

    def _sweep_wedges(self, p: float) -> None:
        if self.state is AnimationState.IDLE:
            self.state = AnimationState.SWEEPING_WEDGES
        self.wedge_region = self._set_clip(self.wedge_clip, 360.0 * p)
        self._point_sweep_line(360.0 * p)

    def _sweep_data(self, p: float) -> None:
        self.state = AnimationState.SWEEPING_DATA
        self.data_region = self._set_clip(self.data_clip, 360.0 * p)
        self._point_sweep_line(360.0 + 360.0 * p)

    def _fade_sweep_line(self, p: float) -> None:
        self.sweep_line.set_alpha(1.0 - p)

    def _set_clip(self, clip: Wedge, sweep: float) -> SweepRegion:
        region = sweep_region(self.layout, sweep)
        clip.set_theta2(region.end_degrees)
        return region

    def _point_sweep_line(self, degrees: float) -> None:
        cx, cy = self.layout.center
        a = math.radians(self.wedge_region.start_degrees + degrees)
        r = self.layout.sweep_radius
        self.sweep_line.set_data([cx, cx + r * math.cos(a)], [cy, cy + r * math.sin(a)])

    @property
    def settled(self) -> bool:
        return self.state is AnimationState.SETTLED

    def settle(self) -> None:
        """Final frame: nothing clipped, sweep line hidden, grid complete."""
        self.wedge_region = self._set_clip(self.wedge_clip, 360.0)
        self.data_region = self._set_clip(self.data_clip, 360.0)
        self.sweep_line.set_visible(False)
        for circle, ring in zip(self.chart.rings, self.layout.rings):
            circle.set_radius(ring.radius)
        for line in self.chart.spokes:
            line.set_alpha(1.0)
        self.state = AnimationState.SETTLED

    # ---- host frame loop ----
    def _frame(self, frame: int, fps: float) -> list:
        if not self.chart.is_current or self.timeline.cancelled:
            return []
        t = min(frame / fps, self.timeline.duration)
        if t >= self.timeline.time:
            self.timeline.seek(t)
        return []

    def _func_animation(self, fps: float) -> FuncAnimation:
        frames = int(math.ceil(self.timeline.duration * fps)) + 1
        return FuncAnimation(
            self.chart.mount.figure,
            partial(self._frame, fps=fps),
            frames=frames,
            interval=1000.0 / fps,
            repeat=False,
            blit=False,
        )

    def play(self, fps: float = DEFAULT_FPS) -> FuncAnimation:
        self._animation = self._func_animation(fps)
        return self._animation

    def save(self, path, fps: float = DEFAULT_FPS) -> Path:
        """Write the whole reveal as a GIF (Pillow)."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self._animation = self._func_animation(fps)
        self._animation.save(str(out), writer=PillowWriter(fps=fps))
        return out

    def stop(self) -> None:
        self.timeline.cancel()
        if self._animation is not None:
            source = getattr(self._animation, "event_source", None)
            if source is not None:
                source.stop()
            self._animation = None


def render_animated(
    mount: ChartMount, layout: LayoutResult, config: RenderConfig, timeline: Optional[Timeline] = None
) -> RenderedChart:
    """render() plus a fresh sweep timeline starting from IDLE."""
    chart = render(mount, layout, config)
    SweepAnimator(chart, timeline)
    return chart
