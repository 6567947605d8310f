"""MD3 decoding: value types, binary reader and name helpers"""

from md3kit.format.exceptions import (
    MD3Error,
    TruncatedOrCorruptError,
    UnexpectedEndOfDataError,
    UnsupportedVersionError,
    WrongMagicError,
)
from md3kit.format.names import name_to_str
from md3kit.format.reader import decode, read_md3
from md3kit.format.tags import interpolate_tag
from md3kit.format.types import (
    MD3_ID,
    MD3_VERSION,
    Frame,
    FrameTag,
    FrameVertex,
    Model,
    Shader,
    Surface,
    TexCoord,
    Triangle,
)

__all__ = [
    "decode",
    "read_md3",
    "name_to_str",
    "interpolate_tag",
    "MD3_ID",
    "MD3_VERSION",
    "Frame",
    "FrameTag",
    "FrameVertex",
    "Model",
    "Shader",
    "Surface",
    "TexCoord",
    "Triangle",
    "MD3Error",
    "WrongMagicError",
    "UnsupportedVersionError",
    "UnexpectedEndOfDataError",
    "TruncatedOrCorruptError",
]
