# utils/text_wrap.py
from __future__ import annotations

from functools import lru_cache
from typing import Callable, List, Tuple

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextToPath

TextMeasure = Callable[[str], float]

_TEXT_TO_PATH = TextToPath()


@lru_cache(maxsize=32)
def font_measure(font_size: float = 14.0, family: str = "sans-serif") -> TextMeasure:
    """Width of a single line of text in pixels (1pt == 1px at the chart's 72 dpi)."""
    prop = FontProperties(family=family, size=font_size)

    @lru_cache(maxsize=1024)
    def measure(text: str) -> float:
        if not text:
            return 0.0
        width, _, _ = _TEXT_TO_PATH.get_text_width_height_descent(text, prop, ismath=False)
        return float(width)

    return measure


def wrap_label(text: str, width: float, measure: TextMeasure) -> Tuple[str, ...]:
    """
    Greedy word wrap: keep adding words while the line fits `width`,
    otherwise start a new line. A single word wider than `width` keeps its own line.
    """
    words = text.split()
    if not words:
        return ()
    lines: List[str] = []
    line = [words[0]]
    for word in words[1:]:
        candidate = " ".join(line + [word])
        if measure(candidate) > width:
            lines.append(" ".join(line))
            line = [word]
        else:
            line.append(word)
    lines.append(" ".join(line))
    return tuple(lines)
