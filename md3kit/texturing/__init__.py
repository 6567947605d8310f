"""
Texture helpers for packed animations
"""

from .preview import render_preview, preview_to_base64

__all__ = [
    "render_preview",
    "preview_to_base64",
]
