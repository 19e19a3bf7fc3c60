"""
Pytest configuration and shared fixtures for settingvalues tests.

Path setup is handled by pyproject.toml [tool.pytest.ini_options] pythonpath.
"""

import pytest

from settingvalues.conversions import SettingValueConverter
from settingvalues.type_registry import TypeRegistry


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def registry():
    """Return a fresh TypeRegistry with no aliases."""
    return TypeRegistry()


@pytest.fixture
def converter(registry):
    """Return a converter bound to the fresh registry."""
    return SettingValueConverter(registry=registry)
