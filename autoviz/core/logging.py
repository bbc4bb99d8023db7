"""
Logging for AutoViz.

Every module logs through a child of the ``autoviz`` logger and attaches its
render context (canvas size, camera, output path, ...) with ``extra=``.
StructuredFormatter appends that context to the line, or emits one JSON
object per record for log files.
"""

import json
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

PACKAGE_LOGGER = "autoviz"

# attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "taskName",
}


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class StructuredFormatter(logging.Formatter):
    """
    Formatter that keeps the ``extra=`` context of a record.

    ``style="text"`` gives ``time LEVEL logger: message | key=value, ...``;
    ``style="json"`` gives one JSON document per line.
    """

    def __init__(self, style: str = "text", with_context: bool = True):
        if style not in ("text", "json"):
            raise ValueError(f"Unknown log style: {style}")
        super().__init__()
        self.style_name = style
        self.with_context = with_context

    @staticmethod
    def context_of(record: logging.LogRecord) -> Dict[str, Any]:
        """The fields passed through ``extra=``."""
        return {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        }

    def format(self, record: logging.LogRecord) -> str:
        context = self.context_of(record) if self.with_context else {}

        if self.style_name == "json":
            document = {
                "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
                "where": f"{record.module}:{record.lineno}",
            }
            if context:
                document["context"] = context
            if record.exc_info:
                document["exception"] = self.formatException(record.exc_info)
            return json.dumps(document, ensure_ascii=False)

        line = (f"{time.strftime('%H:%M:%S', time.localtime(record.created))} "
                f"{record.levelname:<8} {record.name}: {record.getMessage()}")
        if context:
            line += " | " + ", ".join(f"{k}={v}" for k, v in context.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class LoggerManager:
    """
    Owns the handlers of the ``autoviz`` logger.

    Library use never needs ``configure``: records then propagate to whatever
    the host application set up. The command line tool configures a stderr
    handler and, optionally, a rotating JSON log file.
    """

    def __init__(self):
        self._configured = False
        self._handlers: List[logging.Handler] = []
        self._log_file: Optional[Path] = None

    def configure(self,
                  log_level: str = "INFO",
                  console_output: bool = True,
                  file_output: bool = False,
                  log_dir: Optional[Union[str, Path]] = None,
                  max_file_size: int = 2 * 1024 * 1024,
                  backup_count: int = 3) -> None:
        """
        Attach handlers to the package logger. Repeated calls are ignored
        until ``shutdown``.

        Args:
            log_level: Threshold for the package logger and the console
            console_output: Log to stderr
            file_output: Also write JSON lines to ``log_dir/autoviz.log``
            log_dir: Log directory, ``~/.autoviz/logs`` by default
            max_file_size: Rotation size of the log file in bytes
            backup_count: Rotated files kept
        """
        if self._configured:
            return

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(level)

        if console_output:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(level)
            console.setFormatter(StructuredFormatter("text"))
            self._handlers.append(console)

        if file_output:
            directory = Path(log_dir) if log_dir else Path.home() / ".autoviz" / "logs"
            directory.mkdir(parents=True, exist_ok=True)
            self._log_file = directory / "autoviz.log"
            file_handler = logging.handlers.RotatingFileHandler(
                self._log_file, maxBytes=max_file_size, backupCount=backup_count, encoding="utf-8"
            )
            file_handler.setFormatter(StructuredFormatter("json"))
            self._handlers.append(file_handler)

        for handler in self._handlers:
            package_logger.addHandler(handler)
        self._configured = True
        self.get_logger("logging").debug("Logging configured", extra={
            "log_level": log_level,
            "log_file": str(self._log_file) if self._log_file else None
        })

    def get_logger(self, name: str) -> logging.Logger:
        """Logger ``autoviz.<name>``."""
        return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")

    def shutdown(self) -> None:
        """Detach and close the handlers added by ``configure``."""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in self._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        package_logger.setLevel(logging.NOTSET)
        self._configured = False
        self._log_file = None

    @property
    def is_configured(self) -> bool:
        return self._configured

    @property
    def log_file(self) -> Optional[Path]:
        return self._log_file


_logger_manager = LoggerManager()


def get_logger(name: str) -> logging.Logger:
    """Logger for an AutoViz component, e.g. ``get_logger("renderer")``."""
    return _logger_manager.get_logger(name)


def configure_logging(log_level: Optional[str] = None, **kwargs) -> None:
    """
    Configure logging from settings; keyword arguments override them.

    Args:
        log_level: Threshold, the ``app.log_level`` setting when None
        **kwargs: Further LoggerManager.configure options
    """
    # settings import logging, so resolve them lazily
    from ..config import get_settings

    settings = get_settings()
    kwargs.setdefault("file_output", settings.log_to_file)
    _logger_manager.configure(log_level=log_level or settings.log_level, **kwargs)


def shutdown_logging() -> None:
    _logger_manager.shutdown()
