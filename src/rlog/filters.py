"""
Per-file level filters.

A filter spec is a comma-separated list of fields. Each field is either
a bare threshold (the global default) or ``PATTERN=THRESHOLD``:

    RLOG_LOG_LEVEL="client.py=DEBUG,WARN"     # DEBUG for client.py, WARN elsewhere
    RLOG_TRACE_LEVEL="db/*.py=3"              # trace depth <= 3 in db/, nothing else

Patterns are shell globs. A pattern without ``/`` is matched against the
caller's file name; a pattern with ``/`` is matched against
``parentdir/filename``. Thresholds are level names for log specs and
integers for trace specs.

Matching is first-match-wins in declaration order, with the global
default always checked last regardless of where it appeared in the
input. Malformed fields are dropped.
"""

import fnmatch
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .levels import INFO, TRACE, TRACE_DISABLED, level_from_name


@dataclass(frozen=True)
class Filter:
    """A single (pattern, threshold) rule.

    An empty pattern matches every caller, including callers whose file
    could not be determined.
    """
    pattern: str
    threshold: int

    def match(self, filename: str, level: int) -> Tuple[bool, bool]:
        """Return (pattern_matched, should_log) for a message.

        Args:
            filename: Caller as ``parentdir/filename`` ('' if unknown)
            level: Message level or trace depth
        """
        if not self.pattern:
            return True, level <= self.threshold
        if not filename:
            return False, False
        target = filename if '/' in self.pattern else filename.rsplit('/', 1)[-1]
        try:
            matched = fnmatch.fnmatchcase(target, self.pattern)
        except re.error:
            matched = False
        if not matched:
            return False, False
        return True, level <= self.threshold


@dataclass(frozen=True)
class FilterSpec:
    """Ordered filters compiled from a spec string.

    The global filter (empty pattern), if present, is always last.
    """
    filters: Tuple[Filter, ...] = field(default_factory=tuple)

    @property
    def enabled(self) -> bool:
        """False when nothing can ever match (used by the trace fast path)."""
        return bool(self.filters)

    @property
    def has_patterns(self) -> bool:
        """True if any filter needs the caller's file name to decide."""
        return any(f.pattern for f in self.filters)

    def matches(self, filename: str, level: int) -> bool:
        """Decide whether a message at ``level`` from ``filename`` is logged."""
        for f in self.filters:
            matched, should_log = f.match(filename, level)
            if matched:
                return should_log
        return False


def _parse_level_threshold(token: str) -> Optional[int]:
    level = level_from_name(token) if token else None
    if level is None or level == TRACE:
        return None
    return level


def _parse_trace_threshold(token: str) -> Optional[int]:
    try:
        depth = int(token)
    except ValueError:
        return None
    if depth < TRACE_DISABLED:
        return None
    return depth


def parse_filter_spec(raw: str, numeric: bool = False,
                      default: Optional[int] = None) -> FilterSpec:
    """Compile a filter spec string into a FilterSpec.

    Never fails: unknown levels, non-numeric trace depths and fields
    with the wrong number of ``=`` separated parts are skipped.

    Args:
        raw: Spec string such as ``"foo.py=DEBUG,WARN"``
        numeric: True for trace specs (integer thresholds)
        default: Global threshold used when the spec has no valid bare
            field. Defaults to INFO for log specs, disabled for trace.

    Returns:
        The compiled FilterSpec
    """
    if default is None:
        default = TRACE_DISABLED if numeric else INFO
    parse_threshold = _parse_trace_threshold if numeric else _parse_level_threshold

    global_threshold = default
    pattern_filters: List[Filter] = []

    for fld in (raw or '').split(','):
        fld = fld.strip()
        if not fld:
            continue
        tokens = [t.strip() for t in fld.split('=')]
        if len(tokens) == 1:
            threshold = parse_threshold(tokens[0])
            if threshold is not None:
                global_threshold = threshold
        elif len(tokens) == 2:
            pattern, value = tokens
            threshold = parse_threshold(value)
            if pattern and threshold is not None:
                pattern_filters.append(Filter(pattern, threshold))

    # A disabled trace default is left out so an empty spec means "off"
    if not (numeric and global_threshold == TRACE_DISABLED):
        pattern_filters.append(Filter('', global_threshold))

    return FilterSpec(tuple(pattern_filters))
