import pytest

from core.errors import AxisGroupError
from core.radar_animation import AnimationState
from core.radar_model import AxisDefinition
from core.radar_render import ChartMount
from utils.io_compat import print_safe
from utils.viz_radar import draw_radar_chart, radar_chart, save_chart


def test_radar_chart_writes_png(pillars, datasets, measure, tmp_path):
    out = tmp_path / "figures" / "radar.png"
    chart = radar_chart(pillars, datasets, out, options={"levels": 4}, measure=measure, dpi=50)
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
    assert len(chart.rings) == 4


def test_static_image_of_animated_chart_is_settled(pillars, datasets, measure, tmp_path):
    chart = radar_chart(pillars, datasets, tmp_path / "radar.svg", animate=True, measure=measure)
    assert chart.animator.state is AnimationState.SETTLED


def test_save_chart_gif_requires_animation(pillars, datasets, measure, tmp_path):
    chart = radar_chart(pillars, datasets, measure=measure)
    with pytest.raises(ValueError):
        save_chart(chart, tmp_path / "radar.gif")


def test_draw_into_same_mount_twice(axes, datasets, group_colors, measure):
    mount = ChartMount()
    draw_radar_chart(mount, axes, datasets, group_colors, animate=True, measure=measure)
    chart = draw_radar_chart(mount, axes, datasets[:1], group_colors, measure=measure)
    assert mount.chart is chart
    assert chart.animator is None
    assert len(mount.figure.axes) == 1
    assert [t.get_text() for _, t in chart.dataset_legend] == ["Baseline"]


def test_axis_without_group_colour_surfaces(datasets, group_colors, measure):
    axes = [AxisDefinition("Thematic Units", "Powerful Practice"), AxisDefinition("Orphan", "Nowhere")]
    with pytest.raises(AxisGroupError):
        draw_radar_chart(ChartMount(), axes, datasets, group_colors, measure=measure)


def test_print_safe_prints(capsys):
    print_safe("Zażółć", "radar")
    assert "radar" in capsys.readouterr().out
