"""
Shared pytest fixtures for the valuerender test suite.
"""

import json
from pathlib import Path

import pytest

from valuerender_core.coin import Coin, DisplayUnit

TESTDATA = Path(__file__).resolve().parent / "testdata"


def load_vectors(name: str) -> list:
    """Load a JSON test-vector file from tests/testdata."""
    with open(TESTDATA / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def cosm_units():
    """Display units for the two denoms of a local test chain."""
    return {
        "ucosm": DisplayUnit("COSM", 6),
        "ustake": DisplayUnit("STAKE", 6),
    }


@pytest.fixture
def one_ucosm():
    return Coin("1", "ucosm")


@pytest.fixture
def config_file(tmp_path):
    """Write a TOML config and return its path."""
    def _write(content: str) -> str:
        path = tmp_path / "valuerender.toml"
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write
