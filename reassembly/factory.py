from __future__ import annotations

from typing import Any, Dict, Optional

from .fragments import DEFAULT_DELIMITER
from .reassembler import DEFAULT_MIN_FRAGMENT_LENGTH, Reassembler


def effective_settings(
    cfg: Dict[str, Any],
    *,
    min_fragment_length: Optional[int] = None,
    delimiter: Optional[str] = None,
) -> Dict[str, Any]:
    """Resolve reassembly settings from the config dict and CLI overrides.

    Reads the ``reassembly`` section:
      reassembly:
        delimiter: ";"
        min_fragment_length: 2

    Explicit keyword overrides win over config values, which win over the
    built-in defaults.
    """
    section = cfg.get("reassembly", {}) if isinstance(cfg.get("reassembly"), dict) else {}
    eff = {
        "min_fragment_length": section.get("min_fragment_length", DEFAULT_MIN_FRAGMENT_LENGTH),
        "delimiter": section.get("delimiter", DEFAULT_DELIMITER),
    }
    if min_fragment_length is not None:
        eff["min_fragment_length"] = min_fragment_length
    if delimiter is not None:
        eff["delimiter"] = delimiter
    return eff


def _validate(settings: Dict[str, Any]) -> None:
    min_len = settings["min_fragment_length"]
    # bool is an int subclass; `min_fragment_length: yes` is a config typo
    if isinstance(min_len, bool) or not isinstance(min_len, int) or min_len < 1:
        raise ValueError(f"reassembly.min_fragment_length must be a positive integer, got {min_len!r}")
    delimiter = settings["delimiter"]
    if not isinstance(delimiter, str) or not delimiter:
        raise ValueError(f"reassembly.delimiter must be a non-empty string, got {delimiter!r}")


def create_reassembler(
    cfg: Optional[Dict[str, Any]] = None,
    *,
    min_fragment_length: Optional[int] = None,
    delimiter: Optional[str] = None,
) -> Reassembler:
    """Factory returning a configured Reassembler.

    Raises ValueError when the effective settings are unusable.
    """
    settings = effective_settings(
        cfg or {},
        min_fragment_length=min_fragment_length,
        delimiter=delimiter,
    )
    _validate(settings)
    return Reassembler(
        min_fragment_length=settings["min_fragment_length"],
        delimiter=settings["delimiter"],
    )
