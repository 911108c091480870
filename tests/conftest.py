"""Shared fixtures for coltypes tests."""

import pytest

from coltypes.core.config import config
from coltypes.dialects import get_dialect
from coltypes.utils.logging import WarningLog


@pytest.fixture
def warnings():
    """A fresh warning log, so every test sees first-time warnings."""
    return WarningLog()


@pytest.fixture
def mysql(warnings):
    return get_dialect("mysql", warnings)


@pytest.fixture
def postgres(warnings):
    return get_dialect("postgres", warnings)


@pytest.fixture
def sqlite(warnings):
    return get_dialect("sqlite", warnings)


@pytest.fixture
def mssql(warnings):
    return get_dialect("mssql", warnings)


@pytest.fixture
def oracle(warnings):
    return get_dialect("oracle", warnings)


@pytest.fixture
def utc(monkeypatch):
    """Pin the default timezone to UTC regardless of the environment."""
    monkeypatch.setattr(config, "timezone", "+00:00")
    return "+00:00"
