"""
AutoViz - scene rendering for traffic and vehicle simulations

Collects drawing instructions, frames them with a camera and writes PNG,
SVG or PDF files.
"""

__version__ = "0.1.0"

from .config import Config, get_settings
from .rendering import (
    RenderModel,
    CameraState,
    StaticCamera,
    TargetFollowCamera,
    ZoomingCamera,
    SceneFollowCamera,
    ComposedCamera,
    update_camera,
    camera_fit_to_content,
    render,
    render_to_canvas,
    write,
)

__all__ = [
    "Config",
    "get_settings",
    "RenderModel",
    "CameraState",
    "StaticCamera",
    "TargetFollowCamera",
    "ZoomingCamera",
    "SceneFollowCamera",
    "ComposedCamera",
    "update_camera",
    "camera_fit_to_content",
    "render",
    "render_to_canvas",
    "write",
]
