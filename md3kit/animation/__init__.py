"""Vertex animation packing and GPU width negotiation"""

from md3kit.animation.exceptions import (
    AnimationError,
    AnimationTooLargeError,
    InvalidSurfaceError,
    TextureTooLargeError,
)
from md3kit.animation.negotiation import (
    fit_to_limit,
    fit_to_max_size,
    next_lower_power_of_two,
    width_candidates,
)
from md3kit.animation.packer import PixelGrid, pack

__all__ = [
    "PixelGrid",
    "pack",
    "fit_to_limit",
    "fit_to_max_size",
    "next_lower_power_of_two",
    "width_candidates",
    "AnimationError",
    "AnimationTooLargeError",
    "InvalidSurfaceError",
    "TextureTooLargeError",
]
