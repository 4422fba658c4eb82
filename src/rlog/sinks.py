"""
Output destinations.

Every sink serializes its writes with a lock so lines from concurrent
callers never interleave. Stream sinks share one lock per stream, so
the old and new snapshot of a reconfigure can't interleave either.
Write failures are dropped per sink: logging must never become a new
source of application errors.
"""

import sys
import threading
from typing import List, Optional, TextIO

STREAM_STDOUT = 'stdout'
STREAM_STDERR = 'stderr'
STREAM_NONE = 'none'

KNOWN_STREAMS = {STREAM_STDOUT, STREAM_STDERR, STREAM_NONE}

_STREAM_LOCKS = {
    STREAM_STDOUT: threading.Lock(),
    STREAM_STDERR: threading.Lock(),
}


class Sink:
    """Base class: a locked, best-effort line writer."""

    def __init__(self, lock: Optional[threading.Lock] = None):
        self._lock = lock if lock is not None else threading.Lock()

    def _target(self) -> Optional[TextIO]:
        raise NotImplementedError

    def write(self, line: str) -> None:
        with self._lock:
            try:
                target = self._target()
                if target is None:
                    return
                target.write(line)
                flush = getattr(target, 'flush', None)
                if flush is not None:
                    flush()
            except (OSError, ValueError, TypeError):
                pass

    def close(self) -> None:
        """Release any resources held by the sink."""


class StreamSink(Sink):
    """Writes to sys.stdout or sys.stderr.

    The stream is looked up on every write, so a host program (or a test)
    that swaps sys.stderr still gets the output.
    """

    def __init__(self, name: str = STREAM_STDERR):
        super().__init__(_STREAM_LOCKS.get(name))
        self.name = name

    def _target(self):
        return getattr(sys, self.name, None)

    def __repr__(self):
        return f'StreamSink({self.name!r})'


class WriterSink(Sink):
    """Wraps a caller-supplied object with a ``write()`` method."""

    def __init__(self, writer):
        super().__init__()
        self.writer = writer

    def _target(self):
        return self.writer


class FileSink(Sink):
    """Appends to a file, creating it if needed."""

    def __init__(self, path: str, fh: TextIO):
        super().__init__()
        self.path = path
        self._fh: Optional[TextIO] = fh

    @classmethod
    def open(cls, path: str) -> Optional['FileSink']:
        """Open ``path`` for appending. Returns None if it can't be opened."""
        try:
            fh = open(path, 'a', encoding='utf-8')
        except OSError:
            return None
        return cls(path, fh)

    def _target(self):
        return self._fh

    def close(self) -> None:
        with self._lock:
            if self._fh is not None:
                try:
                    self._fh.close()
                except OSError:
                    pass
                self._fh = None

    def __repr__(self):
        return f'FileSink({self.path!r})'


def build_sinks(stream: str = '', log_file: str = '') -> List[Sink]:
    """Resolve the configured destinations.

    The stream selector picks stderr (default), stdout or none. A log
    file, if given and openable, is added after the stream.

    Args:
        stream: 'stdout', 'stderr' or 'none' (case-insensitive)
        log_file: Path to append to, or '' for no file

    Returns:
        Zero, one or two sinks
    """
    sinks: List[Sink] = []
    stream = (stream or '').strip().lower()
    if stream not in KNOWN_STREAMS:
        stream = STREAM_STDERR
    if stream != STREAM_NONE:
        sinks.append(StreamSink(stream))
    if log_file:
        file_sink = FileSink.open(log_file)
        if file_sink is not None:
            sinks.append(file_sink)
    return sinks
