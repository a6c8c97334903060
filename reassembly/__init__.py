"""Fragment reassembly package.

Exposes the reassembler, its factory and the error types for external imports.
"""

from .errors import (
    ReassemblyError,
    EmptyInputError,
    FragmentTooShortError,
    UnresolvableFragmentsError,
)
from .factory import create_reassembler
from .reassembler import Reassembler, ReassemblyResult

__all__ = [
    "Reassembler",
    "ReassemblyResult",
    "create_reassembler",
    "ReassemblyError",
    "EmptyInputError",
    "FragmentTooShortError",
    "UnresolvableFragmentsError",
]
