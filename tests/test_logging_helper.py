import pytest

from reassembly.logging_helper import resolve_log_level


@pytest.mark.parametrize(
    "configured,debug,trace,expected",
    [
        ("info", False, False, "info"),
        (" WARN ", False, False, "warn"),
        ("", False, False, "info"),
        ("verbose", False, False, "info"),
        ("error", True, False, "debug"),
        ("error", True, True, "trace"),
        ("info", False, True, "trace"),
    ],
)
def test_resolve_log_level(configured, debug, trace, expected):
    assert resolve_log_level(configured, debug=debug, trace=trace) == expected
