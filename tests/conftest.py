"""Shared pytest fixtures for the conch-shell test suite.

Provides:
- clean_env: strips CONCH_* / listener variables so Settings sees defaults
- scenario_raw: the single-device BIOS export used across report tests
- scenario_lookup: a FakeDeviceLookup resolving srv001 to AMS1 / Dell
- reset_logging: restores structlog and root logger state after each test
"""

import logging

import pytest
import structlog

from fakes import default_lookup, make_device, make_failure, make_raw

_SETTINGS_ENV = (
    "CONCH_API_URL",
    "CONCH_TOKEN",
    "CONCH_USER_AGENT",
    "HTTP_TIMEOUT_SECONDS",
    "REMEDIATION_MINIMUM",
    "DEVICE_URL_TEMPLATE",
    "LISTENER_HOST",
    "LISTENER_PORT",
    "LOG_LEVEL",
    "ENVIRONMENT",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no settings in the environment and no .env in the cwd."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def scenario_raw():
    return make_raw({"srv001": {"bios": make_failure()}})


@pytest.fixture
def scenario_lookup():
    return default_lookup(srv001=make_device("srv001"))


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging so later tests never write to a closed capture stream."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(level)
