from pathlib import Path

import pytest

from quadbreak.approx import ExternalQuadratic, Flatten, Linear, Midpoint
from quadbreak.config import DEFAULTS, load_config, strategy_from_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "quadbreak.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_load_config_merges_defaults(tmp_path: Path):
    cfg = load_config(_write(tmp_path, "cubic_approx:\n  strategy: flatten\n"))

    assert cfg["cubic_approx"]["strategy"] == "flatten"
    assert cfg["cubic_approx"]["tolerance"] == DEFAULTS["cubic_approx"]["tolerance"]
    assert strategy_from_config(cfg) == Flatten(0.1)


def test_empty_file_gives_defaults(tmp_path: Path):
    cfg = load_config(_write(tmp_path, "# nothing"))
    assert cfg == DEFAULTS
    assert strategy_from_config(cfg) == Midpoint()


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_non_mapping_root(tmp_path: Path):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "- midpoint\n- flatten"))


@pytest.mark.parametrize(
    "block, expected",
    [
        ({"strategy": "linear"}, Linear()),
        ({"strategy": "Midpoint"}, Midpoint()),
        ({"strategy": "flatten", "tolerance": 0.5}, Flatten(0.5)),
        ({"strategy": "external-quadratic", "tolerance": "0.25"}, ExternalQuadratic(0.25)),
        ({"strategy": "cu2qu", "tolerance": 1}, ExternalQuadratic(1.0)),
        ({"strategy": "lyon"}, ExternalQuadratic(0.1)),
    ],
)
def test_strategy_from_config(block, expected):
    assert strategy_from_config({"cubic_approx": block}) == expected


def test_strategy_defaults_without_config():
    assert strategy_from_config() == Midpoint()


@pytest.mark.parametrize(
    "block",
    [
        {"strategy": "bezier"},
        {"strategy": "flatten", "tolerance": -1},
        {"strategy": "flatten", "tolerance": None},
        {"strategy": "external_quadratic", "tolerance": "tight"},
    ],
)
def test_invalid_strategy_config(block):
    with pytest.raises(ValueError):
        strategy_from_config({"cubic_approx": block})


def test_cubic_approx_must_be_mapping():
    with pytest.raises(ValueError):
        strategy_from_config({"cubic_approx": "midpoint"})
