"""
Global test configuration and fixtures for the linuxblox test suite.

This module provides:
- Fixtures for config documents, flag registries and sessions on tmp paths
- Pytest collection hooks for automatic test categorization based on file location
"""

import json
import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from linuxblox.flags import FlagDescriptor, FlagKind, FlagRegistry  # noqa: E402
from linuxblox.session import FlagSession  # noqa: E402


# ============================================================================
# PYTEST CONFIGURATION AND HOOKS
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: marks tests touching the filesystem end to end")
    config.addinivalue_line("markers", "property: marks Hypothesis property-based tests")


def pytest_collection_modifyitems(config, items):
    """Automatically add markers to tests based on path and file name."""
    for item in items:
        parts = Path(str(item.path)).parts
        if "unit" in parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in parts:
            item.add_marker(pytest.mark.integration)
        if "properties" in Path(str(item.path)).name:
            item.add_marker(pytest.mark.property)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def small_registry() -> FlagRegistry:
    """Two toggles and two inputs, enough to cover every code path."""
    return FlagRegistry(
        [
            FlagDescriptor("FFlagToggleOn", "toggle on", FlagKind.TOGGLE, enabled=True, value=True),
            FlagDescriptor("FFlagToggleOff", "toggle off", FlagKind.TOGGLE, enabled=False, value=False),
            FlagDescriptor("DFIntNumber", "number input", FlagKind.INPUT, enabled=True, value="144"),
            FlagDescriptor("FStringText", "text input", FlagKind.INPUT, enabled=False, value="abc"),
        ]
    )


@pytest.fixture
def config_path(tmp_path) -> Path:
    return tmp_path / "sober" / "config.json"


@pytest.fixture
def write_config(config_path):
    """Write a JSON document (or raw text) to the config path."""

    def _write(content) -> Path:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content, indent=2)
        config_path.write_text(text, encoding="utf-8")
        return config_path

    return _write


@pytest.fixture
def read_config(config_path):
    def _read() -> dict:
        return json.loads(config_path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def session(config_path, small_registry):
    with FlagSession(config_path, registry=small_registry) as s:
        yield s
