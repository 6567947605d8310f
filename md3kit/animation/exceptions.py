"""Custom exceptions for animation packing and upload negotiation"""


class AnimationError(Exception):
    """Base exception for animation packing errors"""
    pass


class InvalidSurfaceError(AnimationError, ValueError):
    """Surface (or requested width) cannot be packed into a grid"""
    pass


class TextureTooLargeError(AnimationError):
    """Raised by an upload callable when a grid exceeds the GPU limit"""
    pass


class AnimationTooLargeError(AnimationError):
    """No power-of-two width produced a grid the upload accepted"""
    pass
