"""
Core system components
"""

from .exceptions import (
    AutoVizError,
    ErrorSeverity,
    RenderingError,
    InvalidCoordinateSystemError,
    CameraError,
    TargetNotFoundError,
    EmptySceneError,
    SurfaceWriteError,
    SurfaceTypeMismatchError,
    UnsupportedFormatError,
    SceneLoadError,
)
from .logging import get_logger, configure_logging

__all__ = [
    "AutoVizError",
    "ErrorSeverity",
    "RenderingError",
    "InvalidCoordinateSystemError",
    "CameraError",
    "TargetNotFoundError",
    "EmptySceneError",
    "SurfaceWriteError",
    "SurfaceTypeMismatchError",
    "UnsupportedFormatError",
    "SceneLoadError",
    "get_logger",
    "configure_logging",
]
