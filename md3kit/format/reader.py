"""
MD3 binary reader

Decodes an MD3 (IDP3, version 15) stream into a md3kit.format.types.Model.

Layout notes:
- All integers/floats are little-endian with no padding.
- Header offsets are absolute file positions.
- Offsets inside a surface block are relative to the position where that
  block starts (its magic). The block start is passed around explicitly as
  `base` so the two kinds of offsets are never mixed up.
- Any short read or failed seek collapses to UnexpectedEndOfDataError.
"""

import logging
import os
import struct
from typing import BinaryIO, List, Union

from md3kit.format.exceptions import (
    TruncatedOrCorruptError,
    UnexpectedEndOfDataError,
    UnsupportedVersionError,
    WrongMagicError,
)
from md3kit.format.types import (
    FRAME_NAME_LENGTH,
    MD3_ID,
    MD3_VERSION,
    NAME_LENGTH,
    Frame,
    FrameTag,
    FrameVertex,
    Model,
    Shader,
    Surface,
    TexCoord,
    Triangle,
)

logger = logging.getLogger(__name__)

# Header after magic + version: name, flags, 3 counts, skins, 4 offsets
_HEADER = struct.Struct(f"<{NAME_LENGTH}s4xIII4xIIII")
# Surface header after magic: name, flags, 4 counts, 5 offsets
_SURFACE_HEADER = struct.Struct(f"<{NAME_LENGTH}s4xIIIIIIIII")
_FRAME = struct.Struct(f"<10f{FRAME_NAME_LENGTH}s")
_TAG = struct.Struct(f"<{NAME_LENGTH}s12f")
_SHADER = struct.Struct(f"<{NAME_LENGTH}sI")
_TRIANGLE = struct.Struct("<3I")
_TEXCOORD = struct.Struct("<2f")
_VERTEX = struct.Struct("<3hH")
_INT = struct.Struct("<i")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    try:
        data = stream.read(size)
    except (OSError, ValueError) as e:
        raise UnexpectedEndOfDataError(f"Read failed: {e}") from e
    if data is None or len(data) != size:
        raise UnexpectedEndOfDataError()
    return data


def _seek(stream: BinaryIO, offset: int) -> None:
    try:
        stream.seek(offset, os.SEEK_SET)
    except (OSError, ValueError, OverflowError) as e:
        raise UnexpectedEndOfDataError(f"Cannot seek to {offset}: {e}") from e


def _tell(stream: BinaryIO) -> int:
    try:
        return stream.tell()
    except (OSError, ValueError) as e:
        raise UnexpectedEndOfDataError(f"Cannot query stream position: {e}") from e


def _remaining(stream: BinaryIO) -> int:
    """Bytes between the current position and the end of the stream"""
    pos = _tell(stream)
    try:
        end = stream.seek(0, os.SEEK_END)
    except (OSError, ValueError) as e:
        raise UnexpectedEndOfDataError(f"Cannot find end of stream: {e}") from e
    _seek(stream, pos)
    return max(end - pos, 0)


def _read_records(stream: BinaryIO, record: struct.Struct, count: int) -> List[tuple]:
    """Read `count` consecutive fixed-size records"""
    if count == 0:
        return []
    size = record.size * count
    # Counts come straight from the file; never allocate past what is there
    if size > _remaining(stream):
        raise UnexpectedEndOfDataError(
            f"{count} records of {record.size} bytes run past the end of the data"
        )
    data = _read_exact(stream, size)
    return list(record.iter_unpack(data))


def _read_magic(stream: BinaryIO) -> None:
    magic = _read_exact(stream, 4)
    if magic != MD3_ID:
        raise WrongMagicError(magic)


def _read_frames(stream: BinaryIO, count: int) -> List[Frame]:
    frames = []
    for rec in _read_records(stream, _FRAME, count):
        frames.append(Frame(
            min=tuple(rec[0:3]),
            max=tuple(rec[3:6]),
            origin=tuple(rec[6:9]),
            radius=rec[9],
            name=rec[10],
        ))
    return frames


def _read_tags(stream: BinaryIO, count: int) -> List[FrameTag]:
    tags = []
    for rec in _read_records(stream, _TAG, count):
        name, values = rec[0], rec[1:]
        tags.append(FrameTag(
            name=name,
            origin=tuple(values[0:3]),
            axes=(tuple(values[3:6]), tuple(values[6:9]), tuple(values[9:12])),
        ))
    return tags


def _read_surface(stream: BinaryIO) -> Surface:
    base = _tell(stream)
    _read_magic(stream)
    (
        name,
        num_frames,
        num_shaders,
        num_verts,
        num_triangles,
        ofs_triangles,
        ofs_shaders,
        ofs_uvs,
        ofs_vertices,
        ofs_end,
    ) = _SURFACE_HEADER.unpack(_read_exact(stream, _SURFACE_HEADER.size))

    surface = Surface(name=name, num_verts=num_verts, num_frames=num_frames)

    _seek(stream, base + ofs_shaders)
    surface.shaders = [Shader(name=n, index=i) for n, i in _read_records(stream, _SHADER, num_shaders)]

    # Stored winding is reversed relative to ours: (a, b, c) -> (c, b, a)
    _seek(stream, base + ofs_triangles)
    surface.triangles = [Triangle((c, b, a)) for a, b, c in _read_records(stream, _TRIANGLE, num_triangles)]

    _seek(stream, base + ofs_uvs)
    surface.texcoords = [TexCoord(u, v) for u, v in _read_records(stream, _TEXCOORD, num_verts)]

    _seek(stream, base + ofs_vertices)
    surface.vertices = [
        FrameVertex(x, y, z, n)
        for x, y, z, n in _read_records(stream, _VERTEX, num_verts * num_frames)
    ]

    pos = _tell(stream)
    if pos > base + ofs_end:
        raise TruncatedOrCorruptError(pos)

    logger.debug(
        f"Surface at {base}: {num_verts} verts x {num_frames} frames, "
        f"{num_triangles} triangles, {num_shaders} shaders"
    )
    return surface


def decode(stream: BinaryIO) -> Model:
    """
    Decode an MD3 model from a seekable binary stream.

    The stream is read from its current position, which must be the start
    of the file (header offsets are absolute).

    Args:
        stream: Readable, seekable binary file object

    Returns:
        Fully decoded Model

    Raises:
        WrongMagicError: Header or surface does not start with IDP3
        UnsupportedVersionError: Version is not 15
        UnexpectedEndOfDataError: Stream ended before the model was complete
        TruncatedOrCorruptError: Data overran a declared end offset
    """
    _read_magic(stream)
    (version,) = _INT.unpack(_read_exact(stream, _INT.size))
    if version != MD3_VERSION:
        raise UnsupportedVersionError(version)

    (
        name,
        num_frames,
        num_tags,
        num_surfaces,
        ofs_frames,
        ofs_tags,
        ofs_surfaces,
        ofs_end,
    ) = _HEADER.unpack(_read_exact(stream, _HEADER.size))

    model = Model(version=version, name=name, num_tags=num_tags)

    _seek(stream, ofs_frames)
    model.frames = _read_frames(stream, num_frames)

    _seek(stream, ofs_tags)
    model.tags = _read_tags(stream, num_tags * num_frames)

    _seek(stream, ofs_surfaces)
    model.surfaces = [_read_surface(stream) for _ in range(num_surfaces)]

    pos = _tell(stream)
    if pos > ofs_end:
        raise TruncatedOrCorruptError(pos)

    logger.info(
        f"Decoded MD3: {num_frames} frames, {num_tags} tags, {num_surfaces} surfaces"
    )
    return model


def read_md3(path: Union[str, os.PathLike]) -> Model:
    """Open and decode an MD3 file from disk"""
    with open(path, "rb") as f:
        return decode(f)
