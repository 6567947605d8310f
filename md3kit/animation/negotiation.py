"""
Width negotiation for animation uploads.

A GPU caps texture dimensions. When an upload rejects a grid as too large,
the grid is re-packed at the next lower power of two width and offered
again, until it is accepted or the width would reach 0.

The size limit is never stored here: either the upload callable knows it,
or the caller passes it to fit_to_max_size explicitly.
"""

import logging
from typing import Callable, Iterator, Optional, Tuple, TypeVar

from md3kit.animation.exceptions import (
    AnimationTooLargeError,
    InvalidSurfaceError,
    TextureTooLargeError,
)
from md3kit.animation.packer import PixelGrid, pack
from md3kit.format.types import Surface

logger = logging.getLogger(__name__)

T = TypeVar("T")


def next_lower_power_of_two(width: int) -> int:
    """Largest power of two strictly below width (0 when width <= 1)"""
    if width <= 1:
        return 0
    return 1 << ((width - 1).bit_length() - 1)


def width_candidates(vertex_count: int) -> Iterator[int]:
    """
    Widths tried during negotiation: the vertex count, then each next lower
    power of two down to 1.

    Examples:
        >>> list(width_candidates(5))
        [5, 4, 2, 1]
    """
    width = vertex_count
    while width > 0:
        yield width
        width = next_lower_power_of_two(width)


def fit_to_limit(
    surface: Surface,
    upload: Callable[[PixelGrid], T],
    workers: Optional[int] = None,
) -> Tuple[T, PixelGrid]:
    """
    Pack and upload a surface, shrinking the width until the upload succeeds.

    Args:
        surface: Surface to pack
        upload: Called with each candidate grid. Raises TextureTooLargeError to
            request a narrower grid; any other exception aborts negotiation.
        workers: Passed through to pack()

    Returns:
        Tuple of (upload result, accepted grid)

    Raises:
        AnimationTooLargeError: Even a width of 1 was rejected
    """
    if surface.num_verts <= 0:
        raise InvalidSurfaceError("Surface has no vertices")

    last_error: Optional[TextureTooLargeError] = None
    for width in width_candidates(surface.num_verts):
        grid = pack(surface, width, workers=workers)
        try:
            result = upload(grid)
        except TextureTooLargeError as e:
            logger.warning(f"Animation grid {grid.width}x{grid.height} rejected: {e}")
            last_error = e
            continue
        logger.info(f"Animation grid accepted at {grid.width}x{grid.height}")
        return result, grid

    raise AnimationTooLargeError("Animation is too big to upload to the GPU!") from last_error


def fit_to_max_size(surface: Surface, max_size: int, workers: Optional[int] = None) -> PixelGrid:
    """
    Negotiate a grid whose width and height both fit within max_size.

    Args:
        surface: Surface to pack
        max_size: Maximum texture dimension of the target GPU
        workers: Passed through to pack()

    Returns:
        The widest grid that fits
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")

    def check(grid: PixelGrid) -> None:
        if grid.width > max_size or grid.height > max_size:
            raise TextureTooLargeError(f"exceeds {max_size}x{max_size}")

    _, grid = fit_to_limit(surface, check, workers=workers)
    return grid
