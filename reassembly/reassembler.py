from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Sequence, Tuple

from .errors import (
    EmptyInputError,
    FragmentTooShortError,
    ReassemblyError,
    UnresolvableFragmentsError,
)
from .fragments import DEFAULT_DELIMITER, rotated, split_fragments, unique_by_length
from .logging_helper import is_trace_enabled, log_debug, log_fragment_block, log_trace
from .overlap import left_to_right, right_to_left

DEFAULT_MIN_FRAGMENT_LENGTH = 2


class ScanState(Enum):
    SCANNING = "scanning"
    MATCHED = "matched"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class ReassemblyResult:
    """Outcome of one reassembly call: either ``text`` or ``error`` is set."""

    source: Optional[str]
    text: Optional[str] = None
    error: Optional[ReassemblyError] = None
    fragments: int = 0
    rotations: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """Text printed for this line: the merged string or the error message."""
        if self.error is not None:
            return self.error.message
        return self.text or ""


class Reassembler:
    """Rebuild a string from ``;``-delimited overlapping fragments.

    Fragments are deduplicated and queued shortest first. The head of the
    queue is matched against every other fragment, trying the longest overlap
    first, and merged into the first fragment that agrees with it. When a head
    cannot be placed at all the queue is rebuilt from the original sorted list
    starting one position further on; after every starting position has been
    tried the input is reported as unresolvable.

    Instances only hold settings, so one reassembler can serve many lines.
    """

    def __init__(
        self,
        *,
        min_fragment_length: int = DEFAULT_MIN_FRAGMENT_LENGTH,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        self._min_fragment_length = min_fragment_length
        self._delimiter = delimiter

    @property
    def min_fragment_length(self) -> int:
        return self._min_fragment_length

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def reassemble(self, line: Optional[str]) -> ReassemblyResult:
        """Reassemble one line; failures come back as the result's ``error``."""
        try:
            text, fragments, rotations = self._run(line)
        except ReassemblyError as e:
            log_debug(f"Reassembly failed: {e}")
            return ReassemblyResult(
                source=line,
                error=e,
                fragments=getattr(e, "fragments", 0),
                rotations=getattr(e, "rotations", 0),
            )
        return ReassemblyResult(source=line, text=text, fragments=fragments, rotations=rotations)

    def assemble(self, line: Optional[str]) -> str:
        """Like ``reassemble`` but raises ReassemblyError subclasses on failure."""
        text, _, _ = self._run(line)
        return text

    def prepare(self, line: Optional[str]) -> List[str]:
        """Validate ``line`` and return its unique fragments, shortest first."""
        if line is None or not line.strip():
            raise EmptyInputError()
        fragments = unique_by_length(split_fragments(line, self._delimiter))
        log_fragment_block("Fragments", fragments)
        if len(fragments[0]) < self._min_fragment_length:
            log_debug(f"Shortest fragment {fragments[0]!r} is below {self._min_fragment_length} character(s)")
            raise FragmentTooShortError(self._min_fragment_length, fragments=len(fragments))
        return fragments

    def _run(self, line: Optional[str]) -> Tuple[str, int, int]:
        fragments = self.prepare(line)
        text, rotations = self._merge(fragments, line)
        return text, len(fragments), rotations

    def _merge(self, fragments: Sequence[str], original: str) -> Tuple[str, int]:
        queue: Deque[str] = deque(fragments)
        max_overlap = len(fragments[0])
        position = 0

        while len(queue) > 1:
            popped = queue.popleft()
            log_debug(f"Head: {popped!r} ({len(queue)} left, overlap <= {max_overlap})")
            if self._scan(queue, popped, max_overlap) is ScanState.MATCHED:
                continue

            if position == len(fragments) - 1:
                raise UnresolvableFragmentsError(original, rotations=position, fragments=len(fragments))
            position += 1
            queue = rotated(fragments, position)
            log_debug(f"No overlap for {popped!r}; restarting from position {position}")

        return queue[0], position

    def _scan(self, queue: Deque[str], popped: str, max_overlap: int) -> ScanState:
        state = ScanState.SCANNING
        overlap = max_overlap
        while state is ScanState.SCANNING:
            if overlap < 1:
                state = ScanState.EXHAUSTED
                continue
            prefix = popped[:overlap]
            end_index = len(popped) - overlap
            for candidate in queue:
                if is_trace_enabled():
                    log_trace(f"  overlap={overlap} candidate={candidate!r}")
                merged = left_to_right(popped, prefix, candidate)
                if merged is None:
                    merged = right_to_left(popped, end_index, candidate)
                if merged is not None:
                    self._replace(queue, candidate, merged)
                    state = ScanState.MATCHED
                    break
            else:
                overlap -= 1
        return state

    @staticmethod
    def _replace(queue: Deque[str], candidate: str, merged: str) -> None:
        # containment: candidate already covers popped and stays where it is
        if merged == candidate:
            log_debug(f"Contained in {candidate!r}")
            return
        queue.remove(candidate)
        queue.append(merged)
        log_debug(f"Merged into {merged!r}")
