"""
Writing drawn surfaces to files.
"""

from pathlib import Path
from typing import Union

from .canvas import DrawingContext, SurfaceKind
from ..core.exceptions import SurfaceTypeMismatchError, UnsupportedFormatError
from ..core.logging import get_logger

logger = get_logger("output")


def write(surface: DrawingContext, path: Union[str, Path]) -> Path:
    """
    Write ``surface`` to ``path``, choosing the format from the extension.

    ``.png`` needs an image surface. ``.svg`` and ``.pdf`` need a vector
    surface of the same type; the surface is finished before its stream is
    copied to the file.

    Raises:
        SurfaceTypeMismatchError: the surface type does not match the extension
        UnsupportedFormatError: the extension is not png, svg or pdf
    """
    path = Path(path)
    extension = path.suffix.lstrip('.').lower()

    if extension not in {kind.value for kind in SurfaceKind}:
        raise UnsupportedFormatError(extension)

    requested = SurfaceKind(extension)
    if surface.kind is not requested:
        raise SurfaceTypeMismatchError(surface.kind.name, extension)

    if requested is SurfaceKind.IMAGE:
        surface.write_png(path)
    else:
        surface.write_stream(path)

    logger.info("Surface written", extra={
        "path": str(path),
        "format": extension,
        "width": surface.width,
        "height": surface.height
    })
    return path
