"""
Tag interpolation between adjacent frames.

Attachments (weapons, heads) follow a tag whose origin and axes are blended
linearly between the two frames surrounding a fractional frame time.
"""

import math
from typing import Tuple

import numpy as np

from md3kit.format.types import FrameTag, Model


def interpolate_tag(model: Model, tag_index: int, time: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Blend a tag between frame floor(time) and the following frame.

    The following frame is clamped to the last frame, so times past the end
    hold the final pose.

    Args:
        model: Decoded model
        tag_index: Index of the tag within a frame block
        time: Fractional frame time (>= 0)

    Returns:
        Tuple of (origin (3,), axes (3, 3)) as float32 arrays; axes rows are
        the x, y and z axis vectors as stored in the file
    """
    if not model.frames:
        raise IndexError("Model has no frames")
    if time < 0:
        raise ValueError(f"Frame time must be >= 0, got {time}")

    last = len(model.frames) - 1
    frame = min(int(math.floor(time)), last)
    following = min(frame + 1, last)
    t = np.float32(time - frame) if frame < last else np.float32(0.0)

    a = model.tag(tag_index, frame)
    b = model.tag(tag_index, following)
    origin = _as_origin(a) * (1 - t) + _as_origin(b) * t
    axes = _as_axes(a) * (1 - t) + _as_axes(b) * t
    return origin, axes


def _as_origin(tag: FrameTag) -> np.ndarray:
    return np.asarray(tag.origin, dtype=np.float32)


def _as_axes(tag: FrameTag) -> np.ndarray:
    return np.asarray(tag.axes, dtype=np.float32)
