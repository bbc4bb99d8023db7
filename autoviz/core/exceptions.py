"""
Error types raised by AutoViz.

Every error carries a machine readable code, a severity and a context dict
that ends up in the structured log when the error is reported through
``handle_error``. Errors that callers commonly catch by their builtin kind
also derive from ValueError or LookupError.
"""

import logging
import traceback
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class ErrorSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AutoVizError(Exception):
    """
    Base class of all AutoViz errors.

    Args:
        message: What went wrong
        error_code: Stable identifier, the class name by default
        severity: How bad it is for the current render
        context: Values that help locate the problem (paths, ids, sizes)
        cause: Lower level exception this error wraps
    """

    default_severity = ErrorSeverity.MEDIUM

    def __init__(self,
                 message: str,
                 error_code: Optional[str] = None,
                 severity: Optional[ErrorSeverity] = None,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.severity = severity or self.default_severity
        self.context = dict(context or {})
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
            "cause": repr(self.cause) if self.cause is not None else None,
        }

    def __str__(self) -> str:
        text = f"{self.error_code}: {self.message}"
        if self.context:
            text += " (" + ", ".join(f"{k}={v}" for k, v in self.context.items()) + ")"
        if self.cause is not None:
            text += f" <- {self.cause}"
        return text


def _merged(kwargs: Dict[str, Any], **details: Any) -> Dict[str, Any]:
    """Fold subclass details into the ``context`` keyword."""
    kwargs["context"] = {**kwargs.get("context", {}), **details}
    return kwargs


# Configuration

class ConfigurationError(AutoVizError):
    """Configuration could not be loaded or holds unusable values."""

    default_severity = ErrorSeverity.HIGH

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        if config_key is not None:
            _merged(kwargs, config_key=config_key)
        super().__init__(message, **kwargs)


class InvalidConfigValueError(ConfigurationError):
    """A setting holds a value of the wrong kind."""

    def __init__(self, key: str, value: Any, expected: str, **kwargs):
        super().__init__(f"Setting {key} = {value!r} is not a valid {expected}",
                         config_key=key, **_merged(kwargs, value=value))


# Rendering

class RenderingError(AutoVizError):
    """A render model could not be replayed on a surface."""


class InvalidCoordinateSystemError(RenderingError, ValueError):
    """An instruction is tagged with something other than the three coordinate systems."""

    def __init__(self, coordinate_system: Any, **kwargs):
        super().__init__(
            f"Invalid coordinate system {coordinate_system!r}, "
            "expected 'scene', 'camera_pixels' or 'camera_relative'",
            **_merged(kwargs, coordinate_system=str(coordinate_system))
        )
        self.coordinate_system = coordinate_system


# Cameras

class CameraError(AutoVizError):
    """A camera policy could not be applied to a scene."""


class TargetNotFoundError(CameraError, LookupError):
    """The entity a camera follows is not in the scene."""

    def __init__(self, target_id: Any, **kwargs):
        super().__init__(f"No entity with id {target_id!r} in the scene",
                         **_merged(kwargs, target_id=target_id))
        self.target_id = target_id


class EmptySceneError(CameraError, ValueError):
    """A camera that frames entities got a scene without any."""

    def __init__(self, camera_type: str, **kwargs):
        super().__init__(f"{camera_type} needs at least one entity to frame",
                         **_merged(kwargs, camera_type=camera_type))


# Output

class SurfaceWriteError(AutoVizError):
    """A drawn surface could not be written to a file."""


class SurfaceTypeMismatchError(SurfaceWriteError):
    """The file extension asks for a different format than the surface holds."""

    def __init__(self, surface_type: str, extension: str, **kwargs):
        super().__init__(
            f"Cannot write a {surface_type} surface to a .{extension} file; "
            f"use a file extension matching the surface or render onto a "
            f"{extension.upper()} surface",
            **_merged(kwargs, surface_type=surface_type, extension=extension)
        )
        self.surface_type = surface_type
        self.extension = extension


class UnsupportedFormatError(SurfaceWriteError):
    """The file extension is none of png, svg, pdf."""

    def __init__(self, extension: str, **kwargs):
        super().__init__(f"Unsupported file extension '{extension}', use png, svg or pdf",
                         **_merged(kwargs, extension=extension))
        self.extension = extension


# Input

class SceneLoadError(AutoVizError):
    """A scene description file is missing or malformed."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        if file_path is not None:
            _merged(kwargs, file_path=file_path)
        super().__init__(message, **kwargs)


ErrorCallback = Callable[[BaseException, Dict[str, Any]], None]

_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ErrorHandler:
    """
    Reports errors to the ``autoviz.errors`` log and to registered callbacks.

    AutoViz errors are logged at a level derived from their severity; any
    other exception is logged as an error with its traceback.
    """

    def __init__(self):
        self._callbacks: List[ErrorCallback] = []

    def register_error_callback(self, callback: ErrorCallback) -> None:
        self._callbacks.append(callback)

    def handle_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        from .logging import get_logger

        logger = get_logger("errors")
        report: Dict[str, Any] = {"error_type": type(error).__name__}
        report.update(context or {})

        if isinstance(error, AutoVizError):
            report.update(error_code=error.error_code, error_context=error.context)
            logger.log(_LOG_LEVELS[error.severity], error.message, extra=report)
        else:
            report["traceback"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
            logger.error(f"Unexpected error: {error}", extra=report)

        for callback in self._callbacks:
            try:
                callback(error, report)
            except Exception:
                logger.exception("Error callback failed")


_error_handler = ErrorHandler()


def handle_error(error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
    """Report ``error`` through the shared ErrorHandler."""
    _error_handler.handle_error(error, context)
