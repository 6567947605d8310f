"""
md3kit - Decode MD3 models and bake their vertex animation into GPU textures

A small Python library for reading Quake III style MD3 models and packing each
surface's per-frame vertices into a signed 32-bit RGBA texel grid for
vertex animation in shaders.
"""

from md3kit.client import ModelFile
from md3kit.format.reader import decode, read_md3
from md3kit.animation.packer import PixelGrid, pack
from md3kit.animation.negotiation import fit_to_limit, fit_to_max_size

__version__ = "0.1.0"
__all__ = [
    "ModelFile",
    "decode",
    "read_md3",
    "PixelGrid",
    "pack",
    "fit_to_limit",
    "fit_to_max_size",
]
