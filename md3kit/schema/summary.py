"""
Summary schema for decoded MD3 models

A JSON-friendly description of a Model: names are extracted to strings, and
bulky per-vertex data is reduced to counts. Used by `md3kit info --json` and
by the bake sidecar files.
"""

from __future__ import annotations
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from md3kit.format.names import name_to_str
from md3kit.format.types import Frame, FrameTag, Model, Surface

Vec3 = List[float]


class FrameSummary(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., description="Printable part of the 16-byte frame name.")
    min: Vec3 = Field(..., description="Bounding box minimum corner.", min_length=3, max_length=3)
    max: Vec3 = Field(..., description="Bounding box maximum corner.", min_length=3, max_length=3)
    origin: Vec3 = Field(..., description="Frame origin.", min_length=3, max_length=3)
    radius: float = Field(..., description="Bounding sphere radius.")


class TagSummary(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., description="Printable part of the tag name.")
    origin: Vec3 = Field(..., description="Tag origin in frame 0.", min_length=3, max_length=3)


class SurfaceSummary(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str
    vertices: int = Field(..., ge=0, description="Vertices per frame.")
    frames: int = Field(..., ge=0)
    triangles: int = Field(..., ge=0)
    shaders: List[str] = Field(default_factory=list, description="Shader (material) names.")
    vertex_samples: int = Field(..., ge=0, description="Stored FrameVertex records.")

    @model_validator(mode='after')
    def validate_samples(self):
        if self.vertex_samples != self.vertices * self.frames:
            raise ValueError("vertex_samples must equal vertices * frames")
        return self


class AnimationSummary(BaseModel):
    """Geometry of a packed animation grid (bake sidecar)"""
    model_config = ConfigDict(extra='forbid')

    surface: str
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    rows_per_frame: int = Field(..., gt=0)
    frames: int = Field(..., gt=0)
    vertices: int = Field(..., gt=0)
    channels: int = 4
    dtype: str = "int32"
    byteorder: str = Field(..., pattern="^(little|big)$")


class ModelSummary(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str
    version: int
    max_radius: float
    frame_range: Optional[Tuple[int, int]] = Field(None, description="Playable frames, None for static models.")
    frames: List[FrameSummary]
    tags: List[TagSummary]
    surfaces: List[SurfaceSummary]


def _frame_summary(frame: Frame) -> FrameSummary:
    return FrameSummary(
        name=name_to_str(frame.name),
        min=list(frame.min),
        max=list(frame.max),
        origin=list(frame.origin),
        radius=frame.radius,
    )


def _tag_summary(tag: FrameTag) -> TagSummary:
    return TagSummary(name=name_to_str(tag.name), origin=list(tag.origin))


def _surface_summary(surface: Surface) -> SurfaceSummary:
    return SurfaceSummary(
        name=name_to_str(surface.name),
        vertices=surface.num_verts,
        frames=surface.num_frames,
        triangles=len(surface.triangles),
        shaders=[name_to_str(s.name) for s in surface.shaders],
        vertex_samples=len(surface.vertices),
    )


def summarize(model: Model) -> ModelSummary:
    """Build a ModelSummary from a decoded model (tags are taken from frame 0)"""
    return ModelSummary(
        name=name_to_str(model.name),
        version=model.version,
        max_radius=model.max_radius,
        frame_range=model.frame_range(),
        frames=[_frame_summary(f) for f in model.frames],
        tags=[_tag_summary(t) for t in model.tags[:model.num_tags]],
        surfaces=[_surface_summary(s) for s in model.surfaces],
    )
