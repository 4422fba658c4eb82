"""
Settings state and the log emission pipeline.

All rlog functions read one process-wide Settings snapshot. A snapshot
is immutable: reconfiguring builds a complete new one and publishes it
with a single reference swap, so a concurrent log call sees either the
old settings or the new ones, never a mix.

Emit rule (log levels and trace depths alike):

    message level <= threshold of the first matching filter  →  shown

Pipeline for one call:
    public function → basic_log → (caller lookup) → filter spec
        → format line → write to each sink

The first snapshot is built from the environment when this module is
imported, so no explicit setup call is needed.
"""

import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Tuple

from .caller import CallerInfo, CallerResolver, frame_resolver
from .config import RlogConfig, conf_file_mtime, load_config
from .filters import FilterSpec, parse_filter_spec
from .levels import LEVEL_NAMES, NOT_A_TRACE
from .sinks import Sink, WriterSink, build_sinks
from .timefmt import TimeFormatter, now, resolve_time_format

# Frames between basic_log and the application code:
# basic_log → public function (debug, infof, ...) → caller
CALLER_DEPTH = 2

# Width of the level column ("INFO     : ", "TRACE(2) : ")
LEVEL_COLUMN_WIDTH = 9


@dataclass(frozen=True)
class Settings:
    """One complete, immutable rlog configuration snapshot."""
    config: RlogConfig
    log_filter_spec: FilterSpec
    trace_filter_spec: FilterSpec
    show_caller_info: bool = False
    time_format: str = ''
    time_formatter: Optional[TimeFormatter] = field(default=None, compare=False)
    sinks: Tuple[Sink, ...] = ()
    conf_mtime: Optional[float] = None


def build_settings(config: RlogConfig, output=None) -> Settings:
    """Build a settings snapshot from a config.

    Args:
        config: The configuration to apply
        output: Optional writer that replaces the configured
            stream/file destinations

    Returns:
        A new Settings snapshot (not yet published)
    """
    if output is not None:
        sinks = (WriterSink(output),)
    else:
        sinks = tuple(build_sinks(config.log_stream, config.log_file))

    time_formatter = resolve_time_format(config.time_format, config.no_time)
    return Settings(
        config=config,
        log_filter_spec=parse_filter_spec(config.log_level, numeric=False),
        trace_filter_spec=parse_filter_spec(config.trace_level, numeric=True),
        show_caller_info=config.show_caller_info,
        time_format='' if time_formatter is None else (config.time_format or 'RFC3339'),
        time_formatter=time_formatter,
        sinks=sinks,
        conf_mtime=conf_file_mtime(config.conf_file),
    )


# =============================================================================
# Module-level snapshot
# =============================================================================

_settings: Optional[Settings] = None
_swap_lock = threading.Lock()
_reload_lock = threading.Lock()
_last_conf_check = 0.0
_conf_file: Optional[str] = None  # set by set_conf_file()
_resolver: CallerResolver = frame_resolver


def _publish(new: Settings) -> None:
    """Swap in a new snapshot and close sinks the old one no longer shares."""
    global _settings, _last_conf_check
    with _swap_lock:
        old = _settings
        _settings = new
        _last_conf_check = time.monotonic()
    if old is not None:
        for sink in old.sinks:
            if sink not in new.sinks:
                sink.close()


def initialize(config: Optional[RlogConfig] = None, output=None) -> Settings:
    """Build and publish a new snapshot.

    Takes effect for every log call that starts after it returns. Safe to
    call any number of times, from any thread.

    Args:
        config: Configuration to apply (default: load from environment
            and conf file)
        output: Optional writer that replaces the configured destinations

    Returns:
        The published Settings
    """
    if config is None:
        config = load_config(conf_file=_conf_file)
    settings = build_settings(config, output)
    _publish(settings)
    return settings


reconfigure = initialize


def update_env() -> Settings:
    """Re-read the environment and conf file and apply the result."""
    return initialize(load_config(conf_file=_conf_file))


def set_conf_file(path: str) -> Settings:
    """Use ``path`` as the conf file from now on and reload the config.

    The path is kept by rlog; the process environment is left alone.
    """
    global _conf_file
    _conf_file = path
    return update_env()


def set_output(writer) -> Settings:
    """Send all output to ``writer`` only, dropping stream and file sinks."""
    global _settings
    with _swap_lock:
        old = _settings
        new = replace(old, sinks=(WriterSink(writer),))
        _settings = new
    for sink in old.sinks:
        sink.close()
    return new


def get_settings() -> Settings:
    """Return the active snapshot."""
    return _settings


def set_caller_resolver(resolver: Optional[CallerResolver]) -> None:
    """Install a caller resolver (None restores the stack-frame default)."""
    global _resolver
    _resolver = resolver if resolver is not None else frame_resolver


def _reload_if_changed() -> Settings:
    """Re-load the config if the conf file changed since the last check.

    Only one thread does the reload; the others keep the old snapshot.
    """
    global _last_conf_check
    if not _reload_lock.acquire(blocking=False):
        return _settings
    try:
        current = _settings
        _last_conf_check = time.monotonic()
        conf_file = current.config.conf_file
        if conf_file_mtime(conf_file) == current.conf_mtime:
            return current
        settings = build_settings(load_config(conf_file=conf_file))
        _publish(settings)
        return settings
    finally:
        _reload_lock.release()


def current_settings() -> Settings:
    """Return the active snapshot, refreshing it from the conf file if due."""
    settings = _settings
    config = settings.config
    if (config.conf_file and config.conf_check_interval > 0
            and time.monotonic() - _last_conf_check >= config.conf_check_interval):
        settings = _reload_if_changed()
    return settings


# =============================================================================
# Emission
# =============================================================================

def format_message(fmt: str, args: Tuple[Any, ...]) -> str:
    """Build the message body.

    With a format string, applies printf-style ``%`` formatting (a single
    mapping argument fills named fields). Without one, joins the
    arguments with spaces and appends a newline.

    Never raises: a format string that doesn't fit its arguments is
    printed as is, followed by the arguments.
    """
    if not fmt:
        return ' '.join(_safe_str(a) for a in args) + '\n'
    if isinstance(fmt, bytes):
        fmt = fmt.decode('utf-8', errors='replace')
    elif not isinstance(fmt, str):
        fmt = _safe_str(fmt)
    values = args[0] if len(args) == 1 and isinstance(args[0], Mapping) else args
    try:
        return fmt % values
    except Exception:
        return ' '.join([fmt] + [_safe_str(a) for a in args])


def _safe_str(value: Any) -> str:
    """str() of a message argument, falling back to repr()."""
    try:
        return str(value)
    except Exception:
        pass
    try:
        return repr(value)
    except Exception:
        return f'<unprintable {type(value).__name__}>'


def format_line(settings: Settings, level: int, suffix: str, message: str,
                caller: Optional[CallerInfo] = None) -> str:
    """Compose one output line, always ending in a single newline."""
    parts = []
    if settings.time_formatter is not None:
        try:
            parts.append(settings.time_formatter(now()) + ' ')
        except ValueError:
            pass
    decoration = LEVEL_NAMES.get(level, str(level)) + suffix
    parts.append(f'{decoration:<{LEVEL_COLUMN_WIDTH}}: ')
    if settings.show_caller_info and caller is not None:
        parts.append(caller.format() + ' ')
    parts.append(message)
    line = ''.join(parts)
    if not line.endswith('\n'):
        line += '\n'
    return line


def basic_log(level: int, trace_depth: int, fmt: str, suffix: str,
              args: Tuple[Any, ...], settings: Optional[Settings] = None) -> None:
    """Filter, format and write one log message.

    Must be called directly by a public log function: the caller is
    looked up CALLER_DEPTH frames above this function. Never raises.

    Args:
        level: Message level (levels.DEBUG, levels.TRACE, ...)
        trace_depth: Trace depth, or NOT_A_TRACE for regular messages
        fmt: printf-style format string, or '' for space-joined args
        suffix: Appended to the level name ("(3)" for trace depth 3)
        args: Message arguments
        settings: Snapshot already fetched by the caller (default: the
            current one, refreshed from the conf file if due)
    """
    if settings is None:
        settings = current_settings()
    if trace_depth != NOT_A_TRACE:
        spec, candidate = settings.trace_filter_spec, trace_depth
    else:
        spec, candidate = settings.log_filter_spec, level

    # Caller lookup is only paid for when something needs it
    caller = None
    if settings.show_caller_info or spec.has_patterns:
        try:
            caller = _resolver(CALLER_DEPTH)
        except Exception:
            caller = None

    filename = caller.module_and_file if caller is not None else ''
    if not spec.matches(filename, candidate):
        return

    line = format_line(settings, level, suffix, format_message(fmt, args), caller)
    for sink in settings.sinks:
        sink.write(line)


_publish(build_settings(load_config()))
