import importlib
import importlib.util as ilu

MODULES = [
    "core.errors",
    "core.radar_model",
    "core.radar_config",
    "core.radar_layout",
    "core.radar_render",
    "core.radar_animation",
    "utils.text_wrap",
    "utils.viz_radar",
    "utils.io_compat",
    "automation.render_radar",
]


def test_modules_discoverable():
    for mod in MODULES:
        assert ilu.find_spec(mod) is not None, f"Cannot find spec for {mod}"


def test_modules_importable():
    for mod in MODULES:
        importlib.import_module(mod)
