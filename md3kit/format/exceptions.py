"""Custom exceptions for MD3 decoding"""


class MD3Error(Exception):
    """Base exception for MD3 decoding errors"""
    pass


class WrongMagicError(MD3Error):
    """Header or surface block does not start with IDP3"""

    def __init__(self, magic: bytes):
        self.magic = magic
        super().__init__(f"Wrong ID ({magic!r} instead of b'IDP3')")


class UnsupportedVersionError(MD3Error):
    """Version field is not the one supported version"""

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Unsupported version (version is {version})")


class UnexpectedEndOfDataError(MD3Error):
    """Stream ran out (or could not seek) before the model was complete"""

    def __init__(self, message: str = "Reached end of file"):
        super().__init__(message)


class TruncatedOrCorruptError(MD3Error):
    """Reader ended up past a block's declared end offset"""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Reader is after end position (position is {position})")
