import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from core.radar_model import Dataset, Pillar, axes_from_pillars, pillar_colors  # noqa: E402


def char_measure(text: str) -> float:
    """Fixed-pitch stand-in for font metrics: 7px per character."""
    return 7.0 * len(text)


@pytest.fixture
def measure():
    return char_measure


@pytest.fixture
def pillars():
    return [
        Pillar("Powerful Practice", "#F3467C", ("Thematic Units", "Session Structure", "Evidence-Backed Strategies")),
        Pillar("Streamlined Systems", "#00ADBB", ("Paperwork", "Data Collection", "Therapy Planning")),
        Pillar("Intentional Growth", "#FFC728", ("Individual Growth", "School Collaboration", "Community Impact")),
    ]


@pytest.fixture
def axes(pillars):
    return axes_from_pillars(pillars)


@pytest.fixture
def group_colors(pillars):
    return pillar_colors(pillars)


@pytest.fixture
def datasets(axes):
    baseline = [2, 4, 7, 7, 6, 6, 7, 5, 5]
    previous = [5, 6, 6, 6, 7, 7, 8, 6, 7]
    current = [7, 8, 8, 7, 8, 8, 8, 7, 7]
    return [
        Dataset(
            "Baseline",
            {a.name: v for a, v in zip(axes, baseline)},
            explanations={"Thematic Units": "Units planned ad hoc"},
        ),
        Dataset("Previous", {a.name: v for a, v in zip(axes, previous)}),
        Dataset("Current", {a.name: v for a, v in zip(axes, current)}),
    ]
