from __future__ import annotations

from typing import Optional


def left_to_right(popped: str, prefix: str, candidate: str) -> Optional[str]:
    """Try to place ``popped`` after ``candidate``.

    Looks for ``prefix`` (the head of ``popped``) inside ``candidate`` and checks
    that both strings agree from that index up to the end of the shorter one.
    Returns the merged string, ``candidate`` itself when it already contains
    ``popped``, or None when no occurrence lines up.
    """
    index = candidate.find(prefix)
    while index >= 0:
        span = min(len(popped), len(candidate) - index)
        if candidate[index:index + span] == popped[:span]:
            if popped in candidate:
                return candidate
            return candidate[:index] + popped
        index = candidate.find(prefix, index + 1)
    return None


def right_to_left(popped: str, end_index: int, candidate: str) -> Optional[str]:
    """Try to place ``popped`` before ``candidate``.

    ``popped[end_index:]`` is the tail to look for. For each occurrence in
    ``candidate`` the text of ``candidate`` before it must equal the text of
    ``popped`` right before that tail. Returns the merged string or None.
    """
    suffix = popped[end_index:]
    index = candidate.find(suffix)
    while index >= 0:
        start = max(0, end_index - index)
        # index > end_index can never agree: candidate[:index] is longer
        if popped[start:end_index] == candidate[:index]:
            return popped[:end_index - index] + candidate
        index = candidate.find(suffix, index + 1)
    return None
