"""Configuration loading for rlog.

Two-layer config resolution:
  1. Environment variables (RLOG_*)
  2. Conf file — dotenv-style ``KEY = value`` lines

A non-empty environment variable wins over the conf file, except for
conf file entries written as ``!KEY = value``, which win over the
environment. This lets an operator pin a setting in the file even when
the process environment says otherwise.

The conf file defaults to ``<program>.conf`` next to the running
program and is re-checked for changes every RLOG_CONF_CHECK_INTERVAL
seconds (see manager.py).
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values


DEFAULT_CHECK_INTERVAL = 15

ENV_LOG_LEVEL = "RLOG_LOG_LEVEL"
ENV_TRACE_LEVEL = "RLOG_TRACE_LEVEL"
ENV_CALLER_INFO = "RLOG_CALLER_INFO"
ENV_LOG_NOTIME = "RLOG_LOG_NOTIME"
ENV_TIME_FORMAT = "RLOG_TIME_FORMAT"
ENV_LOG_FILE = "RLOG_LOG_FILE"
ENV_LOG_STREAM = "RLOG_LOG_STREAM"
ENV_CONF_FILE = "RLOG_CONF_FILE"
ENV_CONF_CHECK_INTERVAL = "RLOG_CONF_CHECK_INTERVAL"

# Keys that may appear in the conf file. RLOG_CONF_FILE itself only
# makes sense in the environment.
CONF_FILE_KEYS = (
    ENV_LOG_LEVEL, ENV_TRACE_LEVEL, ENV_CALLER_INFO, ENV_LOG_NOTIME,
    ENV_TIME_FORMAT, ENV_LOG_FILE, ENV_LOG_STREAM, ENV_CONF_CHECK_INTERVAL,
)
ALL_KEYS = CONF_FILE_KEYS + (ENV_CONF_FILE,)

_TRUE_VALUES = {"1", "t", "true", "y", "yes"}
_FALSE_VALUES = {"0", "f", "false", "n", "no"}


def parse_bool(value, default=False):
    """Interpret a config string as a boolean.

    Accepts the usual spellings plus y/yes/n/no, case-insensitive.
    Anything else (including None) returns ``default``.
    """
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def parse_interval(value, default=DEFAULT_CHECK_INTERVAL):
    """Interpret the conf-file check interval (seconds, 0 disables)."""
    try:
        interval = int(value.strip())
    except (AttributeError, ValueError):
        return default
    return max(interval, 0)


@dataclass(frozen=True)
class RlogConfig:
    """A complete rlog configuration.

    The two filter specs and the time format stay as strings here; they
    are compiled when a settings snapshot is built from this config.
    """
    log_level: str = ""
    trace_level: str = ""
    time_format: str = ""
    log_file: str = ""
    log_stream: str = ""
    no_time: bool = False
    show_caller_info: bool = False
    conf_file: str = ""
    conf_check_interval: int = DEFAULT_CHECK_INTERVAL

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> "RlogConfig":
        """Build a config from raw RLOG_* strings. Never fails."""
        def get(key):
            return (values.get(key) or "").strip()

        return cls(
            log_level=get(ENV_LOG_LEVEL),
            trace_level=get(ENV_TRACE_LEVEL),
            time_format=get(ENV_TIME_FORMAT),
            log_file=get(ENV_LOG_FILE),
            log_stream=get(ENV_LOG_STREAM),
            no_time=parse_bool(get(ENV_LOG_NOTIME)),
            show_caller_info=parse_bool(get(ENV_CALLER_INFO)),
            conf_file=get(ENV_CONF_FILE),
            conf_check_interval=parse_interval(get(ENV_CONF_CHECK_INTERVAL)),
        )


# ---------------------------------------------------------------------------
# Conf file
# ---------------------------------------------------------------------------
def default_conf_file_path(argv0=None):
    """Return ``<program>.conf`` for the running program, or '' if unknown."""
    argv0 = sys.argv[0] if argv0 is None else argv0
    if not argv0 or argv0 == "-c":
        return ""
    return f"{argv0}.conf"


def conf_file_mtime(path) -> Optional[float]:
    """Modification time of the conf file, None if absent or unreadable."""
    if not path:
        return None
    try:
        return os.stat(path).st_mtime
    except OSError:
        return None


def read_conf_file(path) -> Dict[str, str]:
    """Parse a conf file, returning empty dict on error.

    Keys keep a leading ``!`` so merge_values() can honour it.
    Entries without a value are dropped.
    """
    if not path or not Path(path).is_file():
        return {}
    try:
        raw = dotenv_values(path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}
    return {key.strip(): value for key, value in raw.items()
            if value is not None}


def merge_values(env: Mapping[str, str],
                 file_values: Mapping[str, str]) -> Dict[str, str]:
    """Merge environment and conf file values.

    For each known key, checks (in order):
      1. ``!KEY`` in the conf file
      2. Non-empty KEY in the environment
      3. KEY in the conf file
    """
    merged = {}
    for key in ALL_KEYS:
        forced = file_values.get(f"!{key}") if key in CONF_FILE_KEYS else None
        if forced is not None:
            merged[key] = forced
            continue

        env_val = env.get(key)
        if env_val:
            merged[key] = env_val
            continue

        file_val = file_values.get(key) if key in CONF_FILE_KEYS else None
        if file_val is not None:
            merged[key] = file_val

    return merged


def load_config(environ: Optional[Mapping[str, str]] = None,
                conf_file: Optional[str] = None) -> RlogConfig:
    """Load the effective config from the environment and the conf file.

    Args:
        environ: Environment mapping (default: os.environ)
        conf_file: Conf file path; overrides RLOG_CONF_FILE and the default
    """
    env = os.environ if environ is None else environ
    if conf_file is None:
        conf_file = (env.get(ENV_CONF_FILE) or "").strip() or default_conf_file_path()

    merged = merge_values(env, read_conf_file(conf_file))
    merged[ENV_CONF_FILE] = conf_file
    return RlogConfig.from_values(merged)
