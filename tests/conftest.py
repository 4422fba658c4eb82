"""Shared test fixtures for the rlog test suite."""

import io

import pytest

from rlog import manager as _manager_mod
from rlog.config import ALL_KEYS, RlogConfig


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded or timing-dependent tests")


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Make sure RLOG_* variables from the developer's shell don't leak in."""
    for key in ALL_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_settings():
    """Put back the active snapshot, caller resolver and conf file after each test."""
    saved = (_manager_mod._settings, _manager_mod._resolver, _manager_mod._conf_file)
    yield
    _manager_mod._settings, _manager_mod._resolver, _manager_mod._conf_file = saved


# ---------------------------------------------------------------------------
# Output capture
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer for capturing output."""
    return io.StringIO()


@pytest.fixture
def make_config():
    """Build a quiet test config: no timestamp, no stream, no conf file."""
    def _make(**overrides):
        values = dict(
            log_stream="none",
            no_time=True,
            conf_file="",
            conf_check_interval=0,
        )
        values.update(overrides)
        return RlogConfig(**values)

    return _make


@pytest.fixture
def log_to(buf, make_config):
    """Initialize rlog with a test config, writing to ``buf``.

    Returns a function that returns the captured lines.
    """
    def _init(**overrides):
        _manager_mod.initialize(make_config(**overrides), output=buf)
        return lambda: buf.getvalue().splitlines()

    return _init
