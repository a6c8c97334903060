import csv

import pytest

from scripts.run_reassembly import ERR_FILE_NOT_EXISTS, ERR_NO_FILE_INPUT, main


@pytest.fixture
def config_dir(tmp_path):
    d = tmp_path / "cfg"
    d.mkdir()
    return d


def _write_input(tmp_path, *lines):
    path = tmp_path / "fragments.txt"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_missing_argument(capsys, config_dir):
    assert main(["--config-dir", str(config_dir)]) == 1
    assert capsys.readouterr().out.strip() == ERR_NO_FILE_INPUT
    assert ERR_NO_FILE_INPUT == "File path must be provided as input"


def test_missing_file(tmp_path, capsys, config_dir):
    assert main([str(tmp_path / "nope.txt"), "--config-dir", str(config_dir)]) == 1
    assert capsys.readouterr().out.strip() == ERR_FILE_NOT_EXISTS
    assert ERR_FILE_NOT_EXISTS == "File does not exists"


def test_each_line_is_processed_independently(tmp_path, capsys, config_dir):
    path = _write_input(
        tmp_path,
        "Hello;o world!",
        "This is not;;actually good",
        "",
        "No way to reassembl;amble this string",
        "ab;bcd;cde",
    )
    assert main([str(path), "--config-dir", str(config_dir)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Hello world!",
        "Fragment size must be at least 2",
        "Input must be not null and not empty!",
        "Can't reassemble fragments : No way to reassembl;amble this string",
        "abcde",
    ]


def test_crlf_line_endings(tmp_path, capsys, config_dir):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"Hello;o world!\r\nab;bcd;cde\r\n")
    assert main([str(path), "--config-dir", str(config_dir)]) == 0
    assert capsys.readouterr().out.splitlines() == ["Hello world!", "abcde"]


def test_cli_overrides(tmp_path, capsys, config_dir):
    path = _write_input(tmp_path, "Hello|o world!")
    assert main([str(path), "--config-dir", str(config_dir), "--delimiter", "|"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Hello world!"]

    path = _write_input(tmp_path, "Hello;o world!")
    assert main([str(path), "--config-dir", str(config_dir), "--min-fragment-length", "6"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Fragment size must be at least 6"]


def test_config_file_settings(tmp_path, capsys, config_dir):
    (config_dir / "config.yaml").write_text("reassembly:\n  delimiter: ','\n", encoding="utf-8")
    path = _write_input(tmp_path, "ab,bcd,cde")
    assert main([str(path), "--config-dir", str(config_dir)]) == 0
    assert capsys.readouterr().out.splitlines() == ["abcde"]


def test_invalid_settings_exit_2(tmp_path, config_dir):
    path = _write_input(tmp_path, "ab;bcd")
    assert main([str(path), "--config-dir", str(config_dir), "--min-fragment-length", "0"]) == 2


def test_qc_report(tmp_path, config_dir):
    path = _write_input(
        tmp_path,
        "repeat, now;now let's repeat; repeat now!",
        "This is not;;actually good",
    )
    report = tmp_path / "out" / "report.csv"
    assert main([str(path), "--config-dir", str(config_dir), "--report", str(report)]) == 0

    with open(report, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["status"] for r in rows] == ["OK", "FAILED"]
    assert rows[0]["line_no"] == "1"
    assert rows[0]["fragments"] == "3"
    assert rows[0]["rotations"] == "1"
    assert rows[0]["output_len"] == str(len("repeat, now let's repeat now!"))
    assert rows[1]["error"] == "FragmentTooShortError"
    assert rows[1]["output_len"] == "0"


def test_missing_argument_checked_before_config(capsys, config_dir):
    (config_dir / "config.yaml").write_text("logging: [unclosed\n", encoding="utf-8")
    assert main(["--config-dir", str(config_dir)]) == 1
    assert capsys.readouterr().out.strip() == ERR_NO_FILE_INPUT


def test_broken_config_is_fatal_once_input_exists(tmp_path, capsys, config_dir):
    (config_dir / "config.yaml").write_text("logging: [unclosed\n", encoding="utf-8")
    path = _write_input(tmp_path, "ab;bcd")
    assert main([str(path), "--config-dir", str(config_dir)]) == 2
    assert capsys.readouterr().err.startswith("FATAL:")


def test_qc_report_counts_fragments_of_failed_lines(tmp_path, config_dir):
    path = _write_input(tmp_path, "No way to reassembl;amble this string")
    report = tmp_path / "report.csv"
    assert main([str(path), "--config-dir", str(config_dir), "--report", str(report)]) == 0

    with open(report, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["status"] == "FAILED"
    assert rows[0]["error"] == "UnresolvableFragmentsError"
    assert rows[0]["fragments"] == "2"
    assert rows[0]["rotations"] == "1"
