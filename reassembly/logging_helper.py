import logging
import sys
from typing import Callable, Iterable

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def _routing_filter(max_level: int) -> Callable[[logging.LogRecord], bool]:
    def _filter(record: logging.LogRecord) -> bool:
        return record.levelno <= max_level
    return _filter


def _build_logger() -> logging.Logger:
    logger = logging.getLogger("fragment_reassembly")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    fmt = logging.Formatter("[%(levelname)s] %(message)s")

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(fmt)
    stdout_handler.addFilter(_routing_filter(logging.INFO))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(fmt)
    stderr_handler.setLevel(logging.WARNING)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)
    logger.propagate = False
    return logger


_LOGGER = _build_logger()

_LEVELS = {
    "trace": TRACE_LEVEL,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_log_level(configured: str, *, debug: bool = False, trace: bool = False) -> str:
    """Pick the effective level name: --trace beats --debug beats the config value."""
    if trace:
        return "trace"
    if debug:
        return "debug"
    lvl = str(configured or "").strip().lower()
    return lvl if lvl in _LEVELS else "info"


def set_log_level(level: str) -> None:
    """Set logger level based on config/CLI string; unknown names fall back to info."""
    lvl = str(level or "").strip().lower()
    _LOGGER.setLevel(_LEVELS.get(lvl, logging.INFO))


def is_trace_enabled() -> bool:
    return _LOGGER.isEnabledFor(TRACE_LEVEL)


def is_debug_enabled() -> bool:
    return _LOGGER.isEnabledFor(logging.DEBUG)


def log_trace(message: str) -> None:
    _LOGGER.log(TRACE_LEVEL, message)


def log_debug(message: str) -> None:
    _LOGGER.debug(message)


def log_info(message: str) -> None:
    _LOGGER.info(message)


def log_warn(message: str) -> None:
    _LOGGER.warning(message)


def log_error(message: str) -> None:
    _LOGGER.error(message)


def log_fragment_block(title: str, fragments: Iterable[str]) -> None:
    """Log one fragment per line at DEBUG level, framed by BEGIN/END markers."""
    if not is_debug_enabled():
        return
    items = list(fragments)
    log_debug(f"{title} BEGIN ({len(items)} fragment(s))")
    for idx, fragment in enumerate(items):
        log_debug(f"  [{idx}] {fragment!r}")
    log_debug(f"{title} END")
