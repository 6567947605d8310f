"""
Vertex animation packer.

Flattens a surface's [frames x vertices] matrix of FrameVertex samples into a
2D grid of 4-channel signed 32-bit texels that a GPU can sample.

Grid layout for a surface with V vertices, F frames and row width W:
- rows_per_frame = ceil(V / W)
- each frame owns W * rows_per_frame texels: its V vertex pixels followed by
  zero texels (padding never spills into the next frame)
- frame blocks are stacked in ascending frame order, height = rows_per_frame * F
- each texel is [x, y, z, n] as native-endian int32
"""

import logging
import math
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from md3kit.animation.exceptions import InvalidSurfaceError
from md3kit.format.types import FrameVertex, Surface

logger = logging.getLogger(__name__)

CHANNELS = 4
TEXEL_BYTES = CHANNELS * np.dtype(np.int32).itemsize


@dataclass(frozen=True)
class PixelGrid:
    """
    Packed animation for one surface at one row width.

    Attributes:
        vertices: Vertices per frame
        frames: Number of frames
        rows_per_frame: Texel rows occupied by each frame
        width: Texels per row
        data: width * height * 4 int32 channels, native byte order
    """
    vertices: int
    frames: int
    rows_per_frame: int
    width: int
    data: bytes

    @property
    def height(self) -> int:
        return self.rows_per_frame * self.frames

    @property
    def channels(self) -> int:
        return CHANNELS

    @property
    def pixels_per_frame(self) -> int:
        return self.width * self.rows_per_frame

    @property
    def byteorder(self) -> str:
        return sys.byteorder

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 4) int32 view of the grid"""
        return np.frombuffer(self.data, dtype=np.int32).reshape(self.height, self.width, CHANNELS)


def _to_pixels(vertices: Sequence[FrameVertex]) -> np.ndarray:
    return np.array([v.to_pixel() for v in vertices], dtype=np.int32).reshape(-1, CHANNELS)


def _frame_block(samples: np.ndarray, pixels_per_frame: int) -> bytes:
    """Pixels of one frame followed by its zero padding"""
    block = np.zeros((pixels_per_frame, CHANNELS), dtype=np.int32)
    block[:len(samples)] = samples
    return block.tobytes()


def _check_surface(surface: Surface, width: int) -> None:
    if surface.num_verts <= 0:
        raise InvalidSurfaceError("Surface has no vertices")
    if surface.num_frames <= 0:
        raise InvalidSurfaceError("Surface has no frames")
    if width <= 0:
        raise InvalidSurfaceError(f"Grid width must be positive, got {width}")
    expected = surface.num_verts * surface.num_frames
    if len(surface.vertices) != expected:
        raise InvalidSurfaceError(
            f"Surface declares {expected} vertex samples but holds {len(surface.vertices)}"
        )


def pack(surface: Surface, width: Optional[int] = None, workers: Optional[int] = None) -> PixelGrid:
    """
    Pack a surface's animation into a PixelGrid.

    Args:
        surface: Decoded surface
        width: Texels per row (default: one row per frame, width = vertex count)
        workers: Thread count for building frame blocks (None packs inline).
            Frame order is preserved whatever the count

    Returns:
        New immutable PixelGrid

    Raises:
        InvalidSurfaceError: Surface has no vertices or frames, the vertex list
            does not match its counts, or width is not positive
    """
    vertices = surface.num_verts
    frames = surface.num_frames
    width = vertices if width is None else width
    _check_surface(surface, width)

    rows_per_frame = math.ceil(vertices / width)
    pixels_per_frame = width * rows_per_frame
    height = frames * rows_per_frame

    if frames > 1:
        # (F, V, 4) samples, converted once; frame blocks are numpy slices
        samples = _to_pixels(surface.vertices).reshape(frames, vertices, CHANNELS)
        if workers and workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields in submission order, which is frame order
                blocks: List[bytes] = list(
                    pool.map(lambda f: _frame_block(samples[f], pixels_per_frame), range(frames))
                )
        else:
            blocks = [_frame_block(samples[f], pixels_per_frame) for f in range(frames)]
        data = b"".join(blocks)
    else:
        extra_count = pixels_per_frame - len(surface.vertices)
        padding = np.zeros((extra_count, CHANNELS), dtype=np.int32)
        data = np.concatenate([_to_pixels(surface.vertices), padding]).tobytes()

    assert len(data) == width * height * TEXEL_BYTES

    logger.debug(
        f"Packed {vertices} verts x {frames} frames into {width}x{height} grid "
        f"({rows_per_frame} rows/frame)"
    )
    return PixelGrid(
        vertices=vertices,
        frames=frames,
        rows_per_frame=rows_per_frame,
        width=width,
        data=data,
    )
