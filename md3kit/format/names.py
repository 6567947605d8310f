"""
Helpers for turning fixed-size MD3 name buffers into display strings.

Name fields are raw byte arrays that may carry leading junk, no null
terminator, or trailing garbage after the terminator. The decoder keeps
them as bytes; these helpers are for presentation only.
"""


def _printable(b: int) -> bool:
    return 0x20 <= b < 0x7F


def name_to_str(raw: bytes) -> str:
    """
    Extract the first run of printable ASCII characters from a name buffer.

    Leading non-printable bytes are skipped, and the run stops at the first
    non-printable byte after it.

    Examples:
        >>> name_to_str(b"tag_head\\x00\\x00garbage")
        'tag_head'
        >>> name_to_str(b"\\x00\\x00h_head")
        'h_head'
        >>> name_to_str(b"\\x00\\x01\\x02")
        ''
    """
    start = next((i for i, b in enumerate(raw) if _printable(b)), None)
    if start is None:
        return ""
    end = start
    while end < len(raw) and _printable(raw[end]):
        end += 1
    return raw[start:end].decode("ascii")
