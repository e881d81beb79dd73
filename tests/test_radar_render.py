import pytest
from matplotlib.backend_bases import MouseEvent

from core.radar_config import resolve_config
from core.radar_layout import compute_layout
from core.radar_render import (
    Z_AXIS_LABEL,
    Z_DATASET_LEGEND,
    Z_FILL,
    Z_GROUP_LEGEND,
    Z_MARKER,
    Z_OUTLINE,
    Z_RING,
    Z_RING_LABEL,
    Z_SPOKE,
    Z_WEDGE,
    ChartMount,
    outline_path,
    render,
    tooltip_text,
)


@pytest.fixture
def draw(axes, datasets, group_colors, measure):
    def _draw(mount=None, data=None, **options):
        cfg = resolve_config(options)
        layout = compute_layout(axes, datasets if data is None else data, cfg, group_colors, measure=measure)
        mount = mount or ChartMount()
        return render(mount, layout, cfg)

    return _draw


def _move(chart, xy_data):
    x, y = chart.ax.transData.transform(xy_data)
    event = MouseEvent("motion_notify_event", chart.mount.figure.canvas, x, y)
    chart.hover.on_motion(event)


def test_chart_fills_the_canvas(draw):
    chart = draw()
    fig = chart.mount.figure
    w, h = fig.get_size_inches() * fig.get_dpi()
    assert (w, h) == pytest.approx((1000, 1000))
    assert chart.ax.get_xlim() == (0, 1000)
    assert chart.ax.get_ylim() == (1000, 0)


def test_every_element_is_drawn(draw, axes, datasets):
    chart = draw()
    n = len(axes)
    assert len(chart.wedges) == n
    assert len(chart.rings) == 5
    assert len(chart.ring_labels) == 5
    assert len(chart.spokes) == n
    assert len(chart.fills) == len(chart.outlines) == len(datasets)
    assert [len(row) for row in chart.markers] == [n] * len(datasets)
    assert len(chart.hit_targets) == n * len(datasets)
    assert len(chart.group_legend) == 3
    assert [t.get_text() for _, t in chart.dataset_legend] == ["Baseline", "Previous", "Current"]


def test_back_to_front_order(draw):
    chart = draw()
    order = [
        chart.wedges[0].get_zorder(),
        chart.rings[0].get_zorder(),
        chart.ring_labels[0].get_zorder(),
        chart.spokes[0].get_zorder(),
        chart.axis_labels[0].get_zorder(),
        chart.fills[0].get_zorder(),
        chart.outlines[0].get_zorder(),
        chart.markers[0][0].get_zorder(),
        chart.group_legend[0][0].get_zorder(),
        chart.dataset_legend[0][0].get_zorder(),
    ]
    assert order == [
        Z_WEDGE,
        Z_RING,
        Z_RING_LABEL,
        Z_SPOKE,
        Z_AXIS_LABEL,
        Z_FILL,
        Z_OUTLINE,
        Z_MARKER,
        Z_GROUP_LEGEND,
        Z_DATASET_LEGEND,
    ]
    assert order == sorted(order)


def test_later_datasets_draw_over_earlier_ones(draw):
    chart = draw()
    patches = chart.ax.patches
    fills = [patches.index(f) for f in chart.fills]
    assert fills == sorted(fills)


def test_line_styles_and_colours_follow_encoding(draw):
    chart = draw(color=lambda i: ["red", "green", "blue"][i], style=lambda i: "dashed" if i == 1 else "solid")
    assert chart.outlines[1].get_linestyle() == "dashed"
    assert chart.outlines[0].get_linestyle() == "solid"
    assert chart.outlines[2].get_edgecolor()[:3] == pytest.approx((0, 0, 1))


def test_empty_dataset_list_draws_grid_only(draw):
    chart = draw(data=[])
    assert chart.fills == [] and chart.hit_targets == []
    assert len(chart.wedges) == 9 and len(chart.spokes) == 9
    assert chart.dataset_legend == []


def test_rerender_replaces_previous_chart(draw):
    mount = ChartMount()
    first = draw(mount)
    n_patches = len(first.ax.patches)
    n_texts = len(first.ax.texts)
    second = draw(mount)
    assert mount.figure.axes == [second.ax]
    assert len(second.ax.patches) == n_patches
    assert len(second.ax.texts) == n_texts
    assert first.hover is None
    assert mount.chart is second
    assert not first.is_current and second.is_current


def test_hover_emphasises_series_and_shows_tooltip(draw):
    chart = draw()
    target = next(t for t in chart.hit_targets if t.series == 0 and t.vertex.axis == "Thematic Units")
    _move(chart, target.vertex.position)

    assert chart.hover.active is target
    assert chart.fills[0].get_alpha() == pytest.approx(0.7)
    assert chart.fills[1].get_alpha() == pytest.approx(0.1)
    assert chart.fills[2].get_alpha() == pytest.approx(0.1)
    assert chart.tooltip.get_alpha() == 1.0
    assert chart.tooltip.get_text() == "Thematic Units\nScore: 2\nUnits planned ad hoc"


def test_pointer_out_restores_chart(draw):
    chart = draw()
    target = chart.hit_targets[0]
    _move(chart, target.vertex.position)
    _move(chart, (5, 5))
    assert chart.hover.active is None
    assert [f.get_alpha() for f in chart.fills] == pytest.approx([0.35] * 3)
    assert chart.tooltip.get_alpha() == 0.0


def test_only_one_tooltip_per_chart(draw):
    chart = draw()
    before = len(chart.ax.texts)
    for target in chart.hit_targets[:5]:
        _move(chart, target.vertex.position)
    assert len(chart.ax.texts) == before


def test_tooltip_can_be_disabled(draw):
    chart = draw(tooltip=False)
    assert chart.tooltip is None
    assert chart.hover is None
    assert chart.hit_targets == []
    assert len(chart.markers[0]) == 9


def test_tooltip_text_includes_unit():
    from core.radar_layout import Vertex

    v = Vertex(axis="Paperwork", score=6.5, angle=0.0, radius=1.0, position=(0.0, 0.0))
    assert tooltip_text(v, unit=" pts") == "Paperwork\nScore: 6.5 pts"


def test_outline_path_codes(draw):
    from matplotlib.path import Path

    chart = draw(round_strokes=False)
    path = outline_path(chart.layout.series[0].outline)
    assert path.codes[0] == Path.MOVETO
    assert path.codes[-1] == Path.CLOSEPOLY
    assert len(path.vertices) == 10

    curved = outline_path(draw(round_strokes=True).layout.series[0].outline)
    assert list(curved.codes[1:-1]) == [Path.CURVE4] * 27


def test_chart_saves_as_svg(draw, tmp_path):
    chart = draw()
    out = tmp_path / "radar.svg"
    chart.mount.figure.savefig(out)
    text = out.read_text(encoding="utf-8")
    assert text.lstrip().startswith("<?xml")
    assert "<svg" in text
