"""Normalization of raw path segments into safe node names."""

import re

# Characters rejected by common filesystems, plus ASCII control characters
_ILLEGAL_CHARACTERS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')
_RESERVED_NAMES = {".", ".."}


def sanitize(raw: str) -> str:
    """Turn a raw path segment into a node name.

    Surrounding whitespace is trimmed and characters that are illegal in file or
    folder names are removed. The function never fails; a segment with nothing usable
    left (including the reserved names "." and "..") becomes an empty string, which
    callers skip.

    Args:
        raw: One slash-delimited component of a user-supplied path.

    Returns:
        The cleaned name, or "" if nothing remains.

    Example:
        >>> sanitize("  user?.js ")
        'user.js'
        >>> sanitize('<>|')
        ''
        >>> sanitize("..")
        ''
    """
    cleaned = _ILLEGAL_CHARACTERS.sub("", raw).strip()
    if cleaned in _RESERVED_NAMES:
        return ""
    return cleaned
