"""
rlog — a logging package configured entirely from the outside.

Nothing needs to be set up in code: importing rlog reads the RLOG_*
environment variables (and an optional conf file) and logging works.

    import rlog
    rlog.info("Start of program")
    rlog.debugf("Loaded %d items", 42)
    rlog.trace(2, "A trace message")

Environment variables:
    RLOG_LOG_LEVEL            Level filter spec, e.g. "DEBUG" or
                              "client.py=DEBUG,WARN". Default: INFO
    RLOG_TRACE_LEVEL          Trace depth filter spec, e.g. "3" or
                              "db/*.py=5". Default: -1 (off)
    RLOG_CALLER_INFO          Add [dir/file.py:line (function)] to lines
    RLOG_LOG_NOTIME           Leave out the timestamp
    RLOG_TIME_FORMAT          Named format (RFC3339, ANSIC, Kitchen, ...)
                              or a strftime pattern. Default: RFC3339
    RLOG_LOG_FILE             Also append to this file
    RLOG_LOG_STREAM           stderr (default), stdout or none
    RLOG_CONF_FILE            dotenv-style conf file. Default: <program>.conf
    RLOG_CONF_CHECK_INTERVAL  Seconds between conf file checks. Default: 15

Invalid values are silently ignored and the default is used.

Public API:
    debug/debugf, info/infof, warn/warnf,
    error/errorf, critical/criticalf     — per-level log functions
    trace/tracef                         — numeric-depth trace logging
    initialize / reconfigure             — apply an RlogConfig
    update_env                           — re-read environment and conf file
    set_conf_file                        — switch to another conf file
    set_output                           — send output to a single writer
    get_settings                         — the active Settings snapshot
    set_caller_resolver                  — replace the stack-frame lookup
    RlogConfig, load_config              — configuration
"""

from ._version import __version__, __app_name__
from .api import (
    trace, tracef,
    debug, debugf, info, infof, warn, warnf,
    error, errorf, critical, criticalf,
)
from .config import RlogConfig, load_config
from .filters import Filter, FilterSpec, parse_filter_spec
from .levels import NONE, CRITICAL, ERROR, WARN, INFO, DEBUG, TRACE
from .manager import (
    Settings, initialize, reconfigure, update_env, set_output,
    get_settings, set_caller_resolver, set_conf_file,
)


__all__ = [
    '__version__', '__app_name__',
    'trace', 'tracef',
    'debug', 'debugf', 'info', 'infof', 'warn', 'warnf',
    'error', 'errorf', 'critical', 'criticalf',
    'RlogConfig', 'load_config',
    'Filter', 'FilterSpec', 'parse_filter_spec',
    'NONE', 'CRITICAL', 'ERROR', 'WARN', 'INFO', 'DEBUG', 'TRACE',
    'Settings', 'initialize', 'reconfigure', 'update_env', 'set_output',
    'get_settings', 'set_caller_resolver', 'set_conf_file',
]
