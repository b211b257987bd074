"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from tests.fixtures.sample_ods import DEVICE_OD, MINIMAL_OD, OD_WITH_WARNINGS


def _write_yaml(path: Path, data: dict[str, Any]) -> Path:
    path.write_text(yaml.safe_dump(data, sort_keys=False))
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def device_yaml(fixtures_dir: Path) -> Path:
    """Return path to the hand-written device.yaml fixture."""
    return fixtures_dir / "device.yaml"


@pytest.fixture
def minimal_yaml_file(tmp_path: Path) -> Path:
    """Write the minimal document to a temporary YAML file."""
    return _write_yaml(tmp_path / "minimal.yaml", MINIMAL_OD)


@pytest.fixture
def device_yaml_file(tmp_path: Path) -> Path:
    """Write the device document to a temporary YAML file."""
    return _write_yaml(tmp_path / "device.yaml", DEVICE_OD)


@pytest.fixture
def warnings_yaml_file(tmp_path: Path) -> Path:
    """Write a document that compiles with build warnings."""
    return _write_yaml(tmp_path / "warnings.yaml", OD_WITH_WARNINGS)
