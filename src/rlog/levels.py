"""
Log level constants.

Levels are small integers ordered by verbosity. The emit rule is the
same for log levels and for trace depths:

    message.level <= threshold  →  message is shown

Level assignments:
    ←── quieter ────────────────────────────── louder ──→
    0      1         2      3     4     5      6
    NONE   CRITICAL  ERROR  WARN  INFO  DEBUG  TRACE

TRACE is only used to tag trace messages. It cannot be selected as a
log-level threshold; trace output has its own numeric depth axis.
"""

from typing import Optional

NONE = 0
CRITICAL = 1
ERROR = 2
WARN = 3
INFO = 4
DEBUG = 5
TRACE = 6

LEVEL_NAMES = {
    NONE: 'NONE',
    CRITICAL: 'CRITICAL',
    ERROR: 'ERROR',
    WARN: 'WARN',
    INFO: 'INFO',
    DEBUG: 'DEBUG',
    TRACE: 'TRACE',
}

LEVEL_NUMBERS = {name: level for level, name in LEVEL_NAMES.items()}

# Trace threshold meaning "no trace output"
TRACE_DISABLED = -1

# Trace depth passed by the non-trace functions
NOT_A_TRACE = -1


def level_from_name(name: str) -> Optional[int]:
    """Look up a level by name (case-insensitive). Returns None if unknown."""
    return LEVEL_NUMBERS.get(name.strip().upper())


def level_name(level: int) -> str:
    return LEVEL_NAMES.get(level, str(level))
