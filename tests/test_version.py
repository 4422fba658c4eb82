"""Tests for rlog._version — PEP 440 compliance and version parsing."""

import re

import rlog
from rlog._version import (
    MAJOR, MINOR, PATCH, PHASE,
    PIP_VERSION,
    VERSION,
    get_pip_version,
    get_version,
)


def test_version_format():
    """Version should be MAJOR.MINOR.PATCH[-PHASE]."""
    assert re.match(r"^\d+\.\d+\.\d+(-\w+)?$", get_version()), \
        f"Unexpected version format: {get_version()}"


def test_version_matches_components():
    """Version should start with the MAJOR.MINOR.PATCH constants."""
    assert get_version().startswith(f"{MAJOR}.{MINOR}.{PATCH}")


def test_pip_version_pep440():
    """PIP version must be PEP 440 compliant (no hyphens, proper pre-release)."""
    pip_ver = get_pip_version()
    assert "-" not in pip_ver, \
        f"PEP 440 forbids hyphens in version: {pip_ver}"
    assert re.match(r"^\d+\.\d+\.\d+", pip_ver), \
        f"PIP version doesn't start with N.N.N: {pip_ver}"


def test_pip_version_no_phase():
    """When PHASE is None, PIP version should be plain N.N.N."""
    if PHASE is None:
        assert re.match(r"^\d+\.\d+\.\d+$", get_pip_version())


def test_package_exports_version():
    assert rlog.__version__ == VERSION
    assert PIP_VERSION
