"""
KI Games Logging

Consistent logging for native Python (desktop window) and browser (WASM via
pygbag) environments. Supports per-module log levels and structured records.

Structured Record Logging:
    Structured records (game results, session markers) are routed to sinks:
    - FileSink writes JSONL to disk (native Python)
    - NullSink discards records (default when a module is not enabled)

Usage:
    from kigames.logging import get_logger

    log = get_logger('host')
    log.debug("Frame scheduled")
    log.info("Element connected")

    from kigames.logging import emit_record
    emit_record('invaders', {'type': 'game_over', 'score': 120})

Configuration:
    Environment variables:
        KI_LOG_LEVEL=DEBUG              # Global default level
        KI_LOG_HOST=DEBUG               # Module-specific level
        KI_LOG_DIR=~/ki-logs            # Directory for FileSink output
        KI_LOGGING_INVADERS_ENABLED=true

    Or programmatically:
        from kigames.logging import configure_logging
        configure_logging(level='DEBUG', modules={'loader': 'INFO'})
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


# =============================================================================
# Sink-Based Structured Logging
# =============================================================================

class LogSink(ABC):
    """
    Abstract base class for log record sinks.

    Sinks receive structured log records and write them to their destination.
    """

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """
        Emit a structured log record.

        Args:
            module: Module name (e.g., 'invaders')
            record: Structured data to log (must be JSON-serializable)
        """

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered records."""

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    Writes structured log records to JSONL files.

    Each module gets its own file in the log directory, one JSON object
    per line, framed by a header and a footer record.

    Args:
        log_dir: Directory for log files (default: from get_log_dir())
        session_name: Session identifier for file naming (default: timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, Any] = {}

    def _ensure_dir(self) -> Path:
        """Lazily initialize log directory."""
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _get_file(self, module: str):
        """Get or create file handle for module."""
        if module not in self._files:
            path = self._ensure_dir() / f"{self._session_name}_{module}.jsonl"
            self._files[module] = open(path, 'a')

            header = {
                "type": "header",
                "module": module,
                "session_name": self._session_name,
                "start_time": time.time(),
            }
            self._files[module].write(json.dumps(header) + "\n")

        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write record to module's JSONL file."""
        f = self._get_file(module)
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        f.write(json.dumps(record) + "\n")

    def flush(self) -> None:
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        for module, f in self._files.items():
            footer = {
                "type": "footer",
                "module": module,
                "end_time": time.time(),
            }
            f.write(json.dumps(footer) + "\n")
            f.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Get paths to all log files."""
        log_dir = self._ensure_dir()
        return {
            module: log_dir / f"{self._session_name}_{module}.jsonl"
            for module in self._files
        }


class NullSink(LogSink):
    """No-op sink when structured logging is disabled."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


# Sink registry - active sinks by module
_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Register a sink for a specific module."""
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Emit a structured log record to the appropriate sink.

    Returns:
        True if record was emitted, False if no sink available
    """
    sink = get_sink(module)
    if sink:
        sink.emit(module, record)
        return True
    return False


def close_all_sinks() -> None:
    """Close and unregister every sink (footers written, files released).

    Modules register a fresh sink the next time they need one.
    """
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink_for_environment(
    module: str,
    session_name: Optional[str] = None,
) -> LogSink:
    """
    Create the sink for a module based on its configuration.

    Records only reach disk when KI_LOGGING_<MODULE>_ENABLED is set and we
    are not running in the browser (no writable log directory there).
    """
    config = get_module_config(module)
    if not config.get('enabled', False) or _is_browser():
        return NullSink()
    return FileSink(session_name=session_name)


# =============================================================================
# Global configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'modules': {},
}


def _is_browser() -> bool:
    """Check if running in browser (Emscripten/WASM)."""
    return sys.platform == 'emscripten'


def get_log_dir() -> str:
    """Get the log directory.

    Priority:
    1. Configured log_dir (KI_LOG_DIR at import time)
    2. KI_LOG_DIR environment variable
    3. Platform-specific user data directory
    """
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())

    env_dir = os.environ.get('KI_LOG_DIR')
    if env_dir:
        return str(Path(env_dir).expanduser())

    if sys.platform == 'darwin':
        user_data = Path.home() / 'Library' / 'Application Support' / 'KIGames'
    elif sys.platform == 'win32':
        user_data = Path(os.environ.get('APPDATA', str(Path.home()))) / 'KIGames'
    else:
        xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
        user_data = Path(xdg_data) / 'kigames'

    return str(user_data / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    """Get structured-logging settings for a module.

    KI_LOGGING_INVADERS_ENABLED=true maps to {'enabled': True}.
    """
    return _config.get('modules', {}).get(module.lower(), {})


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    """Set a value in a nested dict, creating intermediate dicts as needed."""
    for key in keys[:-1]:
        d = d.setdefault(key, {})
    d[keys[-1]] = value


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _js_log(msg: str) -> None:
    """Log to stdout and, in the browser, to the devtools console."""
    print(msg)
    if _is_browser():
        try:
            import platform
            platform.window.console.log(msg)
        except AttributeError:
            pass


def _format_message(module: str, level: str, msg: str) -> str:
    return f"[{module}] {level}: {msg}"


def _level_from_string(level_str: str) -> LogLevel:
    """Convert string to LogLevel (unknown names map to INFO)."""
    mapping = {
        'TRACE': LogLevel.TRACE,
        'DEBUG': LogLevel.DEBUG,
        'INFO': LogLevel.INFO,
        'WARNING': LogLevel.WARNING,
        'WARN': LogLevel.WARNING,
        'ERROR': LogLevel.ERROR,
        'CRITICAL': LogLevel.CRITICAL,
        'OFF': LogLevel.OFF,
    }
    return mapping.get(level_str.upper(), LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level for per-module configuration
    """
    _config['default_level'] = _level_from_string(level)

    if modules:
        for mod, mod_level in modules.items():
            _config['module_levels'][mod.lower()] = _level_from_string(mod_level)


def _load_env_config() -> None:
    """Load configuration from environment variables.

    Two prefixes:
    - KI_LOG_*: Log levels (KI_LOG_HOST=DEBUG)
    - KI_LOGGING_*: Module settings (KI_LOGGING_INVADERS_ENABLED=true)
    """
    if 'KI_LOG_LEVEL' in os.environ:
        _config['default_level'] = _level_from_string(os.environ['KI_LOG_LEVEL'])

    if 'KI_LOG_DIR' in os.environ:
        _config['log_dir'] = os.environ['KI_LOG_DIR']

    reserved = ('KI_LOG_LEVEL', 'KI_LOG_DIR')
    for key, value in os.environ.items():
        if key.startswith('KI_LOG_') and key not in reserved:
            module_name = key[len('KI_LOG_'):].lower()
            _config['module_levels'][module_name] = _level_from_string(value)

    for key, value in os.environ.items():
        if key.startswith('KI_LOGGING_'):
            parts = key[len('KI_LOGGING_'):].lower().split('_')
            if len(parts) >= 2:
                module, setting_path = parts[0], parts[1:]
                _config['modules'].setdefault(module, {})
                _set_nested(_config['modules'][module], setting_path, _parse_env_value(value))


# Load env config on import
_load_env_config()


class KILogger:
    """Logger for a specific module."""

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_').replace('/', '_')

    @property
    def level(self) -> LogLevel:
        """Get effective log level for this module."""
        if self._module_key in _config['module_levels']:
            return _config['module_levels'][self._module_key]
        return _config['default_level']

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, level_name: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return

        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"

        _js_log(_format_message(self.module, level_name, msg))

    def trace(self, msg: str, *args) -> None:
        """Log at TRACE level (per-frame detail)."""
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

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
        """Log an error followed by the current exception's traceback."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

        tb = traceback.format_exc()
        if tb and tb.strip() != 'NoneType: None':
            for line in tb.strip().split('\n'):
                self._log(LogLevel.ERROR, 'TRACE', line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> KILogger:
    """
    Get a logger for the specified module.

    Loggers are cached, so calling get_logger('foo') multiple times
    returns the same logger instance.
    """
    return KILogger(module)
