"""
Per-level log functions.

Every level has a plain version, which joins its arguments with spaces
like print(), and an ``f`` version, which takes a printf-style format
string first:

    rlog.info("Listening on", port)
    rlog.infof("Listening on %s:%d", host, port)

Trace messages carry a numeric depth. A message is shown when its depth
is <= the RLOG_TRACE_LEVEL threshold for the calling file:

    rlog.trace(2, "entering retry loop")
    rlog.tracef(3, "attempt %d of %d", n, total)

Each function calls basic_log directly; basic_log relies on that to find
the application's frame, so don't add wrappers between them.
"""

from . import manager
from .levels import CRITICAL, DEBUG, ERROR, INFO, NOT_A_TRACE, TRACE, WARN
from .manager import basic_log


def trace(depth: int, *args) -> None:
    """Log a trace message at the given depth."""
    if depth < 0:
        return
    # Hot path: no trace filters means tracing is off for every file
    settings = manager.current_settings()
    if not settings.trace_filter_spec.enabled:
        return
    basic_log(TRACE, depth, '', f'({depth})', args, settings)


def tracef(depth: int, fmt: str, *args) -> None:
    """Log a formatted trace message at the given depth."""
    if depth < 0:
        return
    settings = manager.current_settings()
    if not settings.trace_filter_spec.enabled:
        return
    basic_log(TRACE, depth, fmt, f'({depth})', args, settings)


def debug(*args) -> None:
    basic_log(DEBUG, NOT_A_TRACE, '', '', args)


def debugf(fmt: str, *args) -> None:
    basic_log(DEBUG, NOT_A_TRACE, fmt, '', args)


def info(*args) -> None:
    basic_log(INFO, NOT_A_TRACE, '', '', args)


def infof(fmt: str, *args) -> None:
    basic_log(INFO, NOT_A_TRACE, fmt, '', args)


def warn(*args) -> None:
    basic_log(WARN, NOT_A_TRACE, '', '', args)


def warnf(fmt: str, *args) -> None:
    basic_log(WARN, NOT_A_TRACE, fmt, '', args)


def error(*args) -> None:
    basic_log(ERROR, NOT_A_TRACE, '', '', args)


def errorf(fmt: str, *args) -> None:
    basic_log(ERROR, NOT_A_TRACE, fmt, '', args)


def critical(*args) -> None:
    basic_log(CRITICAL, NOT_A_TRACE, '', '', args)


def criticalf(fmt: str, *args) -> None:
    basic_log(CRITICAL, NOT_A_TRACE, fmt, '', args)
