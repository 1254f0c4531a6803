"""Batching helpers enforcing per-platform count and length limits."""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """Split ``items`` into contiguous, order-preserving chunks of ``size``.

    An empty sequence still yields one empty chunk so that callers emit
    exactly once for "attachments present but empty".

    Raises:
        ValueError: If ``size`` is smaller than 1.

    Example:
        >>> [len(c) for c in chunk(list(range(51)), 50)]
        [50, 1]
    """
    if size < 1:
        raise ValueError(f"chunk size must be a positive integer (got {size})")
    if not items:
        return [[]]
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def split_text(text: str, size: int) -> List[str]:
    """Cut ``text`` into successive ``size``-character segments.

    The last segment may be shorter. Joining the segments gives back ``text``.
    """
    if size < 1:
        raise ValueError(f"segment size must be a positive integer (got {size})")
    return [text[start : start + size] for start in range(0, len(text), size)] or [""]
