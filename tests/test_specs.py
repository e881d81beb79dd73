from pathlib import Path


def test_runtime_dependencies_declared():
    txt = Path("pyproject.toml").read_text(encoding="utf-8")
    for dep in ("numpy", "pandas", "matplotlib"):
        assert f'"{dep}' in txt, f"{dep} missing from pyproject.toml"
