import pytest

from utils.text_wrap import font_measure, wrap_label


def test_short_label_stays_on_one_line(measure):
    assert wrap_label("Paperwork", 100, measure) == ("Paperwork",)


def test_greedy_wrap_breaks_before_overflowing_word(measure):
    # 7px per char: "Evidence-Backed" = 105px > 100px keeps its own line
    assert wrap_label("Evidence-Backed Strategies", 100, measure) == ("Evidence-Backed", "Strategies")
    assert wrap_label("School Collaboration", 100, measure) == ("School", "Collaboration")
    assert wrap_label("a b c d e f", 35, measure) == ("a b c", "d e f")


def test_empty_label(measure):
    assert wrap_label("   ", 100, measure) == ()


@pytest.mark.parametrize(
    "label,width",
    [
        ("Evidence-Backed Strategies", 100),
        ("one two three four five six seven", 60),
        ("Supercalifragilistic word", 20),
    ],
)
def test_rewrapping_is_stable(measure, label, width):
    once = wrap_label(label, width, measure)
    assert wrap_label(" ".join(once), width, measure) == once
    for line in once:
        assert wrap_label(line, width, measure) == (line,)


def test_font_measure_grows_with_text():
    m = font_measure(14.0)
    assert m("") == 0.0
    assert 0 < m("Data") < m("Data Collection")
    assert font_measure(14.0) is m
