# core/errors.py
from __future__ import annotations


class RadarChartError(Exception):
    """Base class for every error raised while building a radar chart."""


class ConfigurationError(RadarChartError, ValueError):
    """Render options that cannot produce a valid chart (levels < 1, max_value <= 0, ...)."""


class AxisGroupError(ConfigurationError):
    """Axis and pillar definitions disagree (unknown group, axis listed twice, no axes)."""


class DatasetError(RadarChartError, ValueError):
    """A dataset carries a score or record the engine cannot interpret."""
