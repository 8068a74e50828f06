"""
Verse splitting and pagination helpers.
"""

from typing import List, Optional, Tuple

VERSE_SEPARATOR = "\n\n"
DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0


def split_verses(text: str) -> List[str]:
    """
    Split a lyrics blob into verses on blank-line boundaries.

    Verses are returned exactly as they appear between separators, with no
    trimming. Empty text has no verses.
    """
    if not text:
        return []
    return text.split(VERSE_SEPARATOR)


def parse_or_default(param: Optional[str], default: int) -> int:
    """Parse a query-string integer, falling back to ``default`` when absent or malformed."""
    if param is None or param == "":
        return default
    try:
        return int(param.strip())
    except ValueError:
        return default


def paginate(total: int, limit_param: Optional[str], offset_param: Optional[str]) -> Tuple[int, int]:
    """
    Compute the ``[start, end)`` window over ``total`` items.

    Args:
        total: Number of items available.
        limit_param: Raw ``limit`` query value (default 10).
        offset_param: Raw ``offset`` query value (default 0).

    Returns:
        ``(start, end)`` with ``0 <= start <= end <= total``. An offset past
        the end, or a negative limit, yields an empty range.
    """
    limit = parse_or_default(limit_param, DEFAULT_LIMIT)
    offset = parse_or_default(offset_param, DEFAULT_OFFSET)

    start = min(max(offset, 0), total)
    end = min(max(start + limit, start), total)
    return start, end
