"""
Animation grid previews

Renders a PixelGrid as an 8-bit RGBA image so a packed animation can be
inspected in any image viewer. Each channel (x, y, z, normal) is stretched
linearly over its own value range in the grid:

    +---------------------------+
    | frame 0 rows (W wide)     |
    +---------------------------+
    | frame 1 rows              |
    +---------------------------+
    | ...                       |

Zero padding texels use the same mapping as real data, so they show up as
whatever colour 0 maps to in each channel.
"""

import base64
import logging
from io import BytesIO

import numpy as np
from PIL import Image

from md3kit.animation.packer import PixelGrid

logger = logging.getLogger(__name__)


def _normalize(channels: np.ndarray) -> np.ndarray:
    """Map each channel of a (H, W, 4) int array onto 0-255"""
    values = channels.astype(np.float64)
    lo = values.min(axis=(0, 1))
    hi = values.max(axis=(0, 1))
    span = np.where(hi > lo, hi - lo, 1.0)
    scaled = (values - lo) / span * 255.0
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)


def render_preview(grid: PixelGrid, scale: int = 1) -> Image.Image:
    """
    Create an RGBA preview of a packed animation.

    Args:
        grid: Packed animation
        scale: Integer upscale factor (nearest neighbour)

    Returns:
        PIL image of size (width * scale, height * scale)
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")

    pixels = _normalize(grid.as_array())
    image = Image.fromarray(pixels)
    if scale > 1:
        image = image.resize(
            (grid.width * scale, grid.height * scale),
            Image.Resampling.NEAREST,
        )
    logger.info(f"Rendered {image.width}x{image.height} preview of {grid.width}x{grid.height} grid")
    return image


def preview_to_base64(grid: PixelGrid, scale: int = 1) -> str:
    """PNG preview encoded as base64 (same form as embedded atlases)"""
    buffer = BytesIO()
    render_preview(grid, scale).save(buffer, format='PNG')
    return base64.b64encode(buffer.getvalue()).decode('utf-8')
