# core/radar_config.py
"""
Render options for the radar chart.

DEFAULT_CONFIG is the base layer; caller overrides are merged on top
(`{**DEFAULT_CONFIG, **overrides}`) and frozen into one RenderConfig at the
start of a render. Nothing mutates the resolved value afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from core.errors import ConfigurationError
from core.radar_model import normalize_color

# d3 schemeCategory10 == matplotlib tab10
CATEGORY10 = (
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
)

LINE_STYLES = ("solid", "dashed")


def default_format(value: float) -> str:
    return f"{value:.0f}"


@dataclass(frozen=True)
class Margin:
    top: float = 100.0
    right: float = 100.0
    bottom: float = 100.0
    left: float = 100.0


DEFAULT_CONFIG: Dict[str, Any] = dict(
    width=800.0,
    height=800.0,
    margin=Margin(),
    levels=5,
    max_value=8.0,
    label_factor=1.15,
    wrap_width=100.0,
    opacity_area=0.35,
    opacity_circles=0.1,
    wedge_opacity=0.1,
    dot_radius=4.0,
    stroke_width=2.0,
    round_strokes=True,
    curve_tension=0.0,
    rotation_degrees=0.0,
    angle_offset_degrees=0.0,
    color=None,
    style=None,
    format=default_format,
    tooltip=True,
    unit="",
    font_size=14.0,
    highlight_opacity=0.7,
    dim_opacity=0.1,
    # animation timings (seconds)
    sweep_duration=0.5,
    data_sweep_duration=0.5,
    ring_duration=0.5,
    ring_stagger=0.05,
    spoke_fade=0.05,
    sweep_fade=0.25,
)


@dataclass(frozen=True)
class SeriesStyle:
    color: str
    line_style: str = "solid"


class SeriesEncoding:
    """Per-series colour + line style, resolved once per render into concrete SeriesStyle values."""

    def resolve(self, count: int) -> Tuple[SeriesStyle, ...]:
        return tuple(self.style_for(i) for i in range(count))

    def style_for(self, index: int) -> SeriesStyle:
        raise NotImplementedError


class PaletteEncoding(SeriesEncoding):
    def __init__(self, palette: Tuple[str, ...] = CATEGORY10):
        if not palette:
            raise ConfigurationError("Palette needs at least one colour.")
        self.palette = tuple(normalize_color(c) for c in palette)

    def style_for(self, index: int) -> SeriesStyle:
        return SeriesStyle(color=self.palette[index % len(self.palette)])


class CustomEncoding(SeriesEncoding):
    """Caller-provided mapping; either function may be omitted and falls back to the palette / solid."""

    def __init__(
        self,
        color: Optional[Callable[[int], Any]] = None,
        style: Optional[Callable[[int], str]] = None,
        fallback: Optional[SeriesEncoding] = None,
    ):
        self.color = color
        self.style = style
        self.fallback = fallback or PaletteEncoding()

    def style_for(self, index: int) -> SeriesStyle:
        base = self.fallback.style_for(index)
        color = normalize_color(self.color(index), what=f"colour for series {index}") if self.color else base.color
        line_style = self.style(index) if self.style else base.line_style
        if line_style not in LINE_STYLES:
            raise ConfigurationError(f"Series {index}: line style must be one of {LINE_STYLES}, got {line_style!r}")
        return SeriesStyle(color=color, line_style=line_style)


@dataclass(frozen=True)
class RenderConfig:
    width: float
    height: float
    margin: Margin
    levels: int
    max_value: float
    label_factor: float
    wrap_width: float
    opacity_area: float
    opacity_circles: float
    wedge_opacity: float
    dot_radius: float
    stroke_width: float
    round_strokes: bool
    curve_tension: float
    rotation_degrees: float
    angle_offset_degrees: float
    color: Optional[Callable[[int], Any]]
    style: Optional[Callable[[int], str]]
    format: Callable[[float], str]
    tooltip: bool
    unit: str
    font_size: float
    highlight_opacity: float
    dim_opacity: float
    sweep_duration: float
    data_sweep_duration: float
    ring_duration: float
    ring_stagger: float
    spoke_fade: float
    sweep_fade: float

    def __post_init__(self):
        # runs for dataclasses.replace() too, not only resolve_config()
        levels = self.levels
        if isinstance(levels, bool) or not isinstance(levels, int) or levels < 1:
            raise ConfigurationError(f"levels must be an integer >= 1, got {levels!r}")
        for name in _POSITIVE:
            if not getattr(self, name) > 0:
                raise ConfigurationError(f"{name} must be > 0, got {getattr(self, name)}")
        for name in _NON_NEGATIVE:
            if not getattr(self, name) >= 0:
                raise ConfigurationError(f"{name} must be >= 0, got {getattr(self, name)}")
        for name in _OPACITIES:
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {getattr(self, name)}")
        if not self.label_factor > 1.0:
            raise ConfigurationError(f"label_factor must be > 1, got {self.label_factor}")
        if not callable(self.format):
            raise ConfigurationError("format must be callable")
        if self.radius <= 0:
            raise ConfigurationError(
                f"Margins leave no room for the chart (radius {self.radius:g} for {self.width:g}x{self.height:g})"
            )

    @property
    def canvas_size(self) -> Tuple[float, float]:
        m = self.margin
        return self.width + m.left + m.right, self.height + m.top + m.bottom

    @property
    def radius(self) -> float:
        return min(self.width / 2, self.height / 2) - max(self.margin.left, self.margin.top)

    def encoding(self) -> SeriesEncoding:
        if self.color is None and self.style is None:
            return PaletteEncoding()
        return CustomEncoding(color=self.color, style=self.style)


_OPTION_NAMES = frozenset(f.name for f in fields(RenderConfig))
_OPACITIES = ("opacity_area", "opacity_circles", "wedge_opacity", "highlight_opacity", "dim_opacity")
_POSITIVE = ("width", "height", "max_value", "wrap_width", "font_size")
_NON_NEGATIVE = (
    "dot_radius", "stroke_width", "sweep_duration", "data_sweep_duration",
    "ring_duration", "ring_stagger", "spoke_fade", "sweep_fade",
)
_NUMBERS = _POSITIVE + _NON_NEGATIVE + _OPACITIES + (
    "label_factor", "curve_tension", "rotation_degrees", "angle_offset_degrees",
)


def _margin(value: Union[Margin, Mapping[str, float], None]) -> Margin:
    if value is None:
        return Margin()
    if isinstance(value, Margin):
        return value
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"margin must be a Margin or a mapping, got {type(value).__name__}")
    unknown = set(value) - {"top", "right", "bottom", "left"}
    if unknown:
        raise ConfigurationError(f"Unknown margin sides: {sorted(unknown)}")
    try:
        return Margin(**{k: float(v) for k, v in value.items()})
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid margin: {value!r}") from e


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def resolve_config(overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> RenderConfig:
    """Merge DEFAULT_CONFIG <- overrides <- kwargs and validate the result."""
    layered = {**DEFAULT_CONFIG, **(overrides or {}), **kwargs}
    unknown = sorted(set(layered) - _OPTION_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown radar chart options: {', '.join(unknown)}")

    for name in _NUMBERS:
        if not _is_number(layered[name]):
            raise ConfigurationError(f"{name} must be a number, got {layered[name]!r}")
        layered[name] = float(layered[name])

    for name in ("color", "style", "format"):
        if layered[name] is not None and not callable(layered[name]):
            raise ConfigurationError(f"{name} must be callable")
    if layered["format"] is None:
        layered["format"] = default_format

    layered["margin"] = _margin(layered["margin"])
    layered["round_strokes"] = bool(layered["round_strokes"])
    layered["tooltip"] = bool(layered["tooltip"])
    layered["unit"] = str(layered["unit"])

    return RenderConfig(**layered)
