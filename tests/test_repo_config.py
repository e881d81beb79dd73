import re
from pathlib import Path


def test_flake8_config_present_and_valid():
    p = Path(".flake8")
    assert p.exists(), ".flake8 missing"
    txt = p.read_text(encoding="utf-8", errors="ignore")
    assert "[flake8]" in txt


def test_black_and_flake8_agree_on_line_length():
    black = Path("pyproject.toml").read_text(encoding="utf-8", errors="ignore")
    flake8 = Path(".flake8").read_text(encoding="utf-8", errors="ignore")
    assert "[tool.black]" in black
    black_len = re.search(r"line-length\s*=\s*(\d+)", black).group(1)
    flake8_len = re.search(r"max-line-length\s*=\s*(\d+)", flake8).group(1)
    assert black_len == flake8_len
