"""
Shared fixtures: an in-memory MD3 writer used to build test models.

Layout produced (all offsets match what real exporters write):
    header (108) | frames | tags | surface blocks
Each surface block:
    surface header (108) | shaders | triangles | uvs | vertices
"""

import struct
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pytest

from md3kit.format.types import FrameVertex, Surface


def _name(text: str, size: int = 64) -> bytes:
    return text.encode('ascii').ljust(size, b'\0')


@dataclass
class SurfaceSpec:
    name: str = "s_body"
    num_verts: int = 3
    num_frames: int = 1
    shaders: List[Tuple[str, int]] = field(default_factory=lambda: [("models/body.tga", 0)])
    triangles: List[Tuple[int, int, int]] = field(default_factory=lambda: [(0, 1, 2)])
    uvs: Optional[List[Tuple[float, float]]] = None
    vertices: Optional[List[Tuple[int, int, int, int]]] = None
    end_delta: int = 0  # added to the declared end offset
    magic: bytes = b"IDP3"

    def vertex_records(self):
        if self.vertices is not None:
            return self.vertices
        # Distinct, recognisable samples: x encodes frame, y vertex, z negative
        return [
            (f * 100 + v, v, -(v + 1), 0xFFFF - v)
            for f in range(self.num_frames)
            for v in range(self.num_verts)
        ]

    def uv_records(self):
        if self.uvs is not None:
            return self.uvs
        return [(v * 0.25, 1.0 - v * 0.25) for v in range(self.num_verts)]


def build_surface(spec: SurfaceSpec) -> bytes:
    shaders = b"".join(_name(n) + struct.pack("<I", i) for n, i in spec.shaders)
    triangles = b"".join(struct.pack("<3I", *t) for t in spec.triangles)
    uvs = b"".join(struct.pack("<2f", *uv) for uv in spec.uv_records())
    vertices = b"".join(struct.pack("<3hH", *v) for v in spec.vertex_records())

    ofs_shaders = 108
    ofs_triangles = ofs_shaders + len(shaders)
    ofs_uvs = ofs_triangles + len(triangles)
    ofs_vertices = ofs_uvs + len(uvs)
    ofs_end = ofs_vertices + len(vertices) + spec.end_delta

    header = spec.magic + _name(spec.name) + struct.pack(
        "<i4I5I",
        0,
        spec.num_frames,
        len(spec.shaders),
        spec.num_verts,
        len(spec.triangles),
        ofs_triangles,
        ofs_shaders,
        ofs_uvs,
        ofs_vertices,
        ofs_end,
    )
    assert len(header) == 108
    return header + shaders + triangles + uvs + vertices


def build_md3(
    surfaces: Optional[List[SurfaceSpec]] = None,
    num_frames: int = 1,
    tag_names: Tuple[str, ...] = ("tag_head",),
    name: str = "models/test.md3",
    magic: bytes = b"IDP3",
    version: int = 15,
    end_delta: int = 0,
    trailing: bytes = b"",
) -> bytes:
    """Serialize a small MD3 model. Frame f has radius f + 1.0."""
    if surfaces is None:
        surfaces = [SurfaceSpec(num_frames=num_frames)]

    frames = b"".join(
        struct.pack("<10f", -1.0, -2.0, -3.0, 1.0, 2.0, 3.0, 0.0, 0.0, float(f), f + 1.0)
        + _name(f"frame{f}", 16)
        for f in range(num_frames)
    )
    tags = b"".join(
        _name(tag) + struct.pack(
            "<12f",
            float(f), float(t), 0.5,
            1.0, 0.0, 0.0,
            0.0, 1.0, 0.0,
            0.0, 0.0, 1.0,
        )
        for f in range(num_frames)
        for t, tag in enumerate(tag_names)
    )
    blocks = b"".join(build_surface(s) for s in surfaces)

    ofs_frames = 108
    ofs_tags = ofs_frames + len(frames)
    ofs_surfaces = ofs_tags + len(tags)
    ofs_end = ofs_surfaces + len(blocks) + end_delta

    header = magic + struct.pack("<i", version) + _name(name) + struct.pack(
        "<i3Ii4I",
        0,
        num_frames,
        len(tag_names),
        len(surfaces),
        0,
        ofs_frames,
        ofs_tags,
        ofs_surfaces,
        ofs_end,
    )
    assert len(header) == 108
    return header + frames + tags + blocks + trailing


def make_surface(num_verts: int, num_frames: int) -> Surface:
    """Surface value with distinct per-frame samples, no file round trip"""
    vertices = [
        FrameVertex(f * 100 + v, -v, v * 3 - 7, 0xFFFF - v)
        for f in range(num_frames)
        for v in range(num_verts)
    ]
    return Surface(name=b"s_test", num_verts=num_verts, num_frames=num_frames, vertices=vertices)


@pytest.fixture
def md3_builder():
    """Callable that builds MD3 bytes (see build_md3)"""
    return build_md3


@pytest.fixture
def surface_spec():
    """SurfaceSpec class for describing surface blocks"""
    return SurfaceSpec


@pytest.fixture
def surface_factory():
    """Callable creating Surface values with distinct samples"""
    return make_surface


@pytest.fixture
def sample_md3_bytes():
    """Two-surface, three-frame model with two tags"""
    return build_md3(
        surfaces=[
            SurfaceSpec(name="s_body", num_verts=4, num_frames=3,
                        triangles=[(0, 1, 2), (2, 3, 0)]),
            SurfaceSpec(name="s_head", num_verts=3, num_frames=3,
                        shaders=[("models/head.tga", 0), ("models/head_glow.tga", 1)]),
        ],
        num_frames=3,
        tag_names=("tag_head", "tag_weapon"),
    )


@pytest.fixture
def sample_md3_file(tmp_path, sample_md3_bytes):
    path = tmp_path / "sample.md3"
    path.write_bytes(sample_md3_bytes)
    return path
