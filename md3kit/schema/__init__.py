"""Summary schema definitions."""
from .summary import (
    ModelSummary,
    SurfaceSummary,
    FrameSummary,
    TagSummary,
    AnimationSummary,
    summarize,
)

__all__ = [
    "ModelSummary",
    "SurfaceSummary",
    "FrameSummary",
    "TagSummary",
    "AnimationSummary",
    "summarize",
]
