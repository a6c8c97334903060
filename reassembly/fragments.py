from __future__ import annotations

from collections import deque
from typing import Deque, List, Sequence

DEFAULT_DELIMITER = ";"


def split_fragments(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split one input line into raw fragments.

    Empty pieces (``a;;b`` or a trailing ``;``) are kept so that the length
    check downstream can reject them.
    """
    return line.split(delimiter)


def unique_by_length(fragments: Sequence[str]) -> List[str]:
    """Drop exact duplicates (first occurrence wins) and sort ascending by length.

    ``sorted`` is stable, so equal-length fragments keep their input order.
    """
    return sorted(dict.fromkeys(fragments), key=len)


def rotated(fragments: Sequence[str], position: int) -> Deque[str]:
    """Return a fresh queue starting at ``position`` and wrapping around.

    The input sequence is never mutated; position is taken modulo its length.
    """
    if not fragments:
        return deque()
    pos = position % len(fragments)
    return deque(list(fragments[pos:]) + list(fragments[:pos]))
