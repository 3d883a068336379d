"""
Slapstick Logging

Printed, module-scoped log lines plus JSONL records for game events worth
keeping after a session (every slap, for example).

Usage:
    from slapstick.logging import get_logger, emit_record

    log = get_logger('game_engine')
    log.info("Run loop started")

    emit_record('slaps', {'type': 'slap', 'count': 3})

Environment:
    SLAPSTICK_LOG_LEVEL=DEBUG              # default level
    SLAPSTICK_LOG_ASSETS=DEBUG             # level for one module
    SLAPSTICK_LOG_DIR=~/slap-logs          # where record files go
    SLAPSTICK_LOGGING_SLAPS_ENABLED=true   # write 'slaps' records to disk
"""

import json
import os
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, IO, Optional


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES = {
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'CRITICAL': LogLevel.CRITICAL,
    'OFF': LogLevel.OFF,
}

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},  # module key -> LogLevel
    'log_dir': None,
    'modules': {},        # module key -> record settings, e.g. {'enabled': True}
}


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records of one or more modules."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record."""

    @abstractmethod
    def close(self) -> None:
        pass


class NullSink(LogSink):
    """Drops every record."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def close(self) -> None:
        pass


class FileSink(LogSink):
    """Appends records to ``<log_dir>/<session>_<module>.jsonl``.

    A file is opened on its module's first record and starts with a header
    line; close() writes a footer line to each open file.
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self.session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, IO[str]] = {}

    def _open(self, module: str) -> IO[str]:
        log_dir = self._log_dir or Path(get_log_dir())
        log_dir.mkdir(parents=True, exist_ok=True)
        f = open(log_dir / f"{self.session_name}_{module}.jsonl", 'a')
        self._write(f, {
            'type': 'header',
            'module': module,
            'session_name': self.session_name,
            'start_time': time.time(),
        })
        return f

    @staticmethod
    def _write(f: IO[str], record: Dict[str, Any]) -> None:
        f.write(json.dumps(record) + "\n")

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        if module not in self._files:
            self._files[module] = self._open(module)
        self._write(self._files[module], {'wall_time': time.time(), **record})

    def close(self) -> None:
        for module, f in self._files.items():
            self._write(f, {'type': 'footer', 'module': module, 'end_time': time.time()})
            f.close()
        self._files.clear()


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route records of module to sink, replacing any earlier sink."""
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """Send a record to the module's sink.

    Returns:
        False when no sink is registered for the module
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink_for_module(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink if SLAPSTICK_LOGGING_<MODULE>_ENABLED is set, else NullSink."""
    settings = get_module_config(module)
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

def get_log_dir() -> str:
    """Configured log dir, else $XDG_DATA_HOME/slapstick/logs."""
    if _config['log_dir']:
        return str(Path(_config['log_dir']).expanduser())
    data_home = os.environ.get('XDG_DATA_HOME') or str(Path.home() / '.local' / 'share')
    return str(Path(data_home) / 'slapstick' / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    return _config['modules'].get(module.lower(), {})


def _parse_env_value(value: str) -> Any:
    """'true'/'off' to bool, numerals to int or float, anything else as is."""
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass
    return value


def _level_from_string(name: str) -> LogLevel:
    return _LEVEL_NAMES.get(name.upper(), LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """Set the default level, per-module levels and the record directory."""
    _config['default_level'] = _level_from_string(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module] = _level_from_string(module_level)
    if log_dir:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    """Read SLAPSTICK_LOG_* levels and SLAPSTICK_LOGGING_<MOD>_<KEY> settings."""
    for key, value in os.environ.items():
        if key == 'SLAPSTICK_LOG_LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif key == 'SLAPSTICK_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith('SLAPSTICK_LOG_'):
            _config['module_levels'][key[len('SLAPSTICK_LOG_'):].lower()] = _level_from_string(value)
        elif key.startswith('SLAPSTICK_LOGGING_'):
            module, _, setting = key[len('SLAPSTICK_LOGGING_'):].lower().partition('_')
            if setting:
                _config['modules'].setdefault(module, {})[setting] = _parse_env_value(value)


_load_env_config()


# =============================================================================
# Loggers
# =============================================================================

class SlapstickLogger:
    """Prints ``[module] LEVEL: message`` when the module's level allows it.

    The level is looked up on every call, so configure_logging() also
    affects loggers created before it ran.
    """

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower().replace('.', '_')

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)

    def exception(self, msg: str, *args) -> None:
        """Log at ERROR, followed by the traceback being handled."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)
        for line in traceback.format_exc().rstrip().splitlines():
            self._log(LogLevel.ERROR, 'ERROR', line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> SlapstickLogger:
    """Cached logger for module."""
    return SlapstickLogger(module)
