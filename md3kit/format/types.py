"""
MD3 model value types

Everything the decoder returns is a plain dataclass. Fixed-size name fields
are kept as the raw bytes found in the file: they are not guaranteed to be
null-terminated or even ASCII, so turning them into text is left to
md3kit.format.names.

INDEXING:
- Model.tags is tag-major within each frame block:
  index = tag_index + num_tags * frame_index
- Surface.vertices is vertex-major within each frame block:
  index = vertex_index + num_verts * frame_index
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

MD3_ID = b"IDP3"
MD3_VERSION = 15

NAME_LENGTH = 64
FRAME_NAME_LENGTH = 16

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Mat3 = Tuple[Vec3, Vec3, Vec3]


@dataclass
class Frame:
    """
    One animation pose of the whole model.

    Attributes:
        min: Bounding box minimum corner
        max: Bounding box maximum corner
        origin: Local origin of the frame
        radius: Bounding sphere radius
        name: Raw 16-byte name buffer
    """
    min: Vec3 = (0.0, 0.0, 0.0)
    max: Vec3 = (0.0, 0.0, 0.0)
    origin: Vec3 = (0.0, 0.0, 0.0)
    radius: float = 0.0
    name: bytes = bytes(FRAME_NAME_LENGTH)


@dataclass
class FrameTag:
    """
    Named attachment point for a single frame.

    The axes are stored as read (x axis, y axis, z axis); orthonormality
    is not checked.
    """
    name: bytes
    origin: Vec3
    axes: Mat3


@dataclass(frozen=True)
class Shader:
    """Material reference of a surface (not loaded here)"""
    name: bytes
    index: int


@dataclass(frozen=True)
class Triangle:
    """Three vertex indices, winding already reversed relative to the file"""
    indices: Tuple[int, int, int]


@dataclass(frozen=True)
class TexCoord:
    u: float
    v: float


@dataclass(frozen=True)
class FrameVertex:
    """
    Quantized vertex sample for one vertex in one frame.

    x/y/z are signed 16-bit fixed point positions, n is the packed normal
    code (opaque here).
    """
    x: int
    y: int
    z: int
    n: int

    def to_pixel(self) -> Tuple[int, int, int, int]:
        """Four signed 32-bit channels [x, y, z, n] used by the packer"""
        return (self.x, self.y, self.z, self.n)


@dataclass
class Surface:
    """
    An independently textured mesh piece with its own per-frame vertices.

    Attributes:
        name: Raw 64-byte name buffer
        num_verts: Vertices per frame
        num_frames: Frames stored in this surface
        shaders: Material references
        triangles: Triangles with reversed winding
        texcoords: One UV pair per vertex, shared across frames
        vertices: num_verts * num_frames samples, frame-major
    """
    name: bytes
    num_verts: int
    num_frames: int
    shaders: List[Shader] = field(default_factory=list)
    triangles: List[Triangle] = field(default_factory=list)
    texcoords: List[TexCoord] = field(default_factory=list)
    vertices: List[FrameVertex] = field(default_factory=list)

    def frame_vertices(self, frame: int) -> List[FrameVertex]:
        """Vertices belonging to a single frame, in vertex order"""
        if not 0 <= frame < self.num_frames:
            raise IndexError(f"Frame {frame} out of range (surface has {self.num_frames})")
        start = frame * self.num_verts
        return self.vertices[start:start + self.num_verts]

    def index_buffer(self) -> List[int]:
        """Flat triangle index list, ready for an element buffer"""
        return [i for tri in self.triangles for i in tri.indices]


@dataclass
class Model:
    """
    A decoded MD3 model.

    Attributes:
        version: Format version (always MD3_VERSION)
        name: Raw 64-byte name buffer
        num_tags: Tags per frame
        frames: Animation frames
        tags: num_tags * len(frames) tags, tag-major within each frame
        surfaces: Mesh pieces
    """
    version: int = MD3_VERSION
    name: bytes = bytes(NAME_LENGTH)
    num_tags: int = 0
    frames: List[Frame] = field(default_factory=list)
    tags: List[FrameTag] = field(default_factory=list)
    surfaces: List[Surface] = field(default_factory=list)

    @property
    def max_radius(self) -> float:
        """Largest bounding sphere radius over all frames (0 without frames)"""
        return max((f.radius for f in self.frames), default=0.0)

    def tag(self, tag_index: int, frame: int) -> FrameTag:
        if not 0 <= tag_index < self.num_tags:
            raise IndexError(f"Tag {tag_index} out of range (model has {self.num_tags})")
        if not 0 <= frame < len(self.frames):
            raise IndexError(f"Frame {frame} out of range (model has {len(self.frames)})")
        return self.tags[tag_index + self.num_tags * frame]

    def tag_names(self) -> List[bytes]:
        return [t.name for t in self.tags[:self.num_tags]]

    def frame_range(self) -> Optional[Tuple[int, int]]:
        """Playable frame interval, or None for a static model"""
        if len(self.frames) > 1:
            return (0, len(self.frames) - 1)
        return None
