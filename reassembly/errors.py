from __future__ import annotations

ERR_INPUT_NOT_EMPTY = "Input must be not null and not empty!"
ERR_MIN_FRAG_SIZE = "Fragment size must be at least {min_length}"
ERR_INVALID_REASSEMBLE = "Can't reassemble fragments : "


class ReassemblyError(Exception):
    """Base error for a single reassembly call."""

    @property
    def message(self) -> str:
        return str(self)


class EmptyInputError(ReassemblyError):
    """Input line is missing or blank after trimming."""

    def __init__(self) -> None:
        super().__init__(ERR_INPUT_NOT_EMPTY)


class FragmentTooShortError(ReassemblyError):
    """Shortest fragment is below the configured minimum length."""

    def __init__(self, min_length: int, fragments: int = 0) -> None:
        super().__init__(ERR_MIN_FRAG_SIZE.format(min_length=min_length))
        self.min_length = min_length
        self.fragments = fragments


class UnresolvableFragmentsError(ReassemblyError):
    """Every rotation of the fragment queue ended in a dead end."""

    def __init__(self, original: str, rotations: int = 0, fragments: int = 0) -> None:
        super().__init__(ERR_INVALID_REASSEMBLE + original)
        self.original = original
        self.rotations = rotations
        self.fragments = fragments
