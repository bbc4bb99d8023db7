"""
Command line entry point for AutoViz.

Renders a JSON scene description to a PNG, SVG or PDF file.
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Config, get_config, get_settings, set_config, reset_settings
from .core.exceptions import AutoVizError, handle_error
from .core.logging import configure_logging, get_logger, shutdown_logging
from .scene import load_scene
from .rendering import (
    CameraState,
    ImageCanvas,
    SceneFollowCamera,
    StaticCamera,
    TargetFollowCamera,
    render,
    update_camera,
    write,
)


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Set up command line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="autoviz",
        description="AutoViz - render vehicle scenes to PNG, SVG or PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autoviz scene.json -o scene.png                     # Fit all vehicles on the canvas
  autoviz scene.json -o scene.svg --canvas-size 800x800
  autoviz scene.json -o ego.pdf --camera target-follow --target-id 1 --zoom 15
        """
    )

    parser.add_argument("scene", type=str, metavar="SCENE", help="Scene description (JSON)")
    parser.add_argument("-o", "--output", type=str, required=True, metavar="FILE",
                        help="Output file (.png, .svg or .pdf)")
    parser.add_argument("--version", action="version", version=f"AutoViz {__version__}")

    parser.add_argument("--canvas-size", type=str, metavar="WIDTHxHEIGHT",
                        help="Canvas size in pixels (e.g., 1000x600)")
    parser.add_argument("--camera",
                        choices=["fit", "static", "scene-follow", "target-follow"],
                        default="fit",
                        help="Camera policy (default: fit to content)")
    parser.add_argument("--target-id", type=str, metavar="ID",
                        help="Vehicle id followed by the target-follow camera")
    parser.add_argument("--zoom", type=float, help="Zoom in pixels per meter")
    parser.add_argument("--x", type=float, help="Camera x position (pins the axis)")
    parser.add_argument("--y", type=float, help="Camera y position (pins the axis)")
    parser.add_argument("--rotation", type=float, default=0.0, help="Camera rotation [rad]")
    parser.add_argument("--percent-border", type=float,
                        help="Border fraction used when fitting to content")

    parser.add_argument("--config", type=str, metavar="FILE", help="Path to configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        default=None,
                        help="Set logging level (overrides config)")

    return parser


def parse_canvas_size(size_str: str) -> tuple[int, int]:
    """
    Parse canvas size string into width/height tuple.

    Raises:
        ValueError: If format is invalid
    """
    try:
        width_str, height_str = size_str.lower().split('x')
        width = int(width_str)
        height = int(height_str)

        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive")

        return width, height
    except ValueError as e:
        raise ValueError(f"Invalid canvas size format '{size_str}'. Use WIDTHxHEIGHT (e.g., 1000x600)") from e


def apply_command_line_overrides(args: argparse.Namespace) -> None:
    """Apply command line argument overrides to configuration."""
    config = get_config()

    if args.debug:
        config.set("app.debug", True)
        config.set("app.log_level", "DEBUG")

    if args.log_level:
        config.set("app.log_level", args.log_level)

    if args.canvas_size:
        width, height = parse_canvas_size(args.canvas_size)
        config.set("rendering.canvas_width", width)
        config.set("rendering.canvas_height", height)

    if args.percent_border is not None:
        config.set("rendering.percent_border", args.percent_border)


def _coerce_id(raw: str, frame) -> object:
    """Match a command line id against the ids present in the scene."""
    for entity in frame:
        if str(entity.id) == raw:
            return entity.id
    return raw


def build_camera(args: argparse.Namespace, frame):
    """Camera for the requested policy, already updated on ``frame``; None to auto-fit."""
    settings = get_settings()
    state = CameraState(
        zoom=args.zoom if args.zoom is not None else 1.0,
        rotation=args.rotation,
        canvas_width=settings.canvas_width,
        canvas_height=settings.canvas_height,
    )

    if args.camera == "fit":
        return None
    if args.camera == "static":
        state.set_camera(x=args.x, y=args.y)
        camera = StaticCamera(state=state)
    elif args.camera == "scene-follow":
        camera = SceneFollowCamera(x=args.x, y=args.y, zoom=args.zoom, state=state)
    else:
        if args.target_id is None:
            raise ValueError("--target-id is required for the target-follow camera")
        camera = TargetFollowCamera(_coerce_id(args.target_id, frame), x=args.x, y=args.y, state=state)

    return update_camera(camera, frame)


def create_surface(output: Path, width: int, height: int):
    """Drawing surface matching the output file extension."""
    extension = output.suffix.lower()
    if extension == ".svg":
        from .rendering.vector import SVGCanvas
        return SVGCanvas(width, height)
    if extension == ".pdf":
        from .rendering.vector import PDFCanvas
        return PDFCanvas(width, height)
    return ImageCanvas(width, height)


def initialize_application(args: argparse.Namespace) -> None:
    """Load configuration, apply overrides and set up logging."""
    if args.config:
        set_config(Config(args.config))
        reset_settings()

    apply_command_line_overrides(args)
    configure_logging(get_settings().log_level)


def run(args: argparse.Namespace) -> int:
    """Render the scene; returns the exit code."""
    logger = get_logger("main")
    settings = get_settings()

    description = load_scene(args.scene)
    camera = build_camera(args, description.frame)

    output = Path(args.output)
    surface = create_surface(output, settings.canvas_width, settings.canvas_height)
    render([description.frame], camera=camera, surface=surface,
           canvas_width=settings.canvas_width, canvas_height=settings.canvas_height,
           background_color=description.background)
    write(surface, output)

    logger.info("Scene rendered", extra={
        "scene": args.scene,
        "output": str(output),
        "entities": len(description.frame),
        "camera": args.camera
    })
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main application entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    try:
        initialize_application(args)
        return run(args)
    except (AutoVizError, ValueError) as e:
        handle_error(e, context={"scene": args.scene, "output": args.output})
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
