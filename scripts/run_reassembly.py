#!/usr/bin/env python3
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import yaml

from reassembly import Reassembler, ReassemblyResult, create_reassembler
from reassembly.logging_helper import log_debug, log_error, log_info, log_warn, resolve_log_level, set_log_level

from scripts.config_loader import config_log_level, config_report_path, load_effective_config

ERR_NO_FILE_INPUT = "File path must be provided as input"
ERR_FILE_NOT_EXISTS = "File does not exists"

REPORT_FIELDS = ["line_no", "status", "error", "fragments", "rotations", "input_len", "output_len"]


def iter_lines(path: Path) -> Iterator[str]:
    """Yield each line of ``path`` without its line terminator."""
    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            yield raw.rstrip("\r\n")


def report_row(line_no: int, result: ReassemblyResult) -> Dict[str, object]:
    return {
        "line_no": line_no,
        "status": "OK" if result.ok else "FAILED",
        "error": type(result.error).__name__ if result.error is not None else "",
        "fragments": result.fragments,
        "rotations": result.rotations,
        "input_len": len(result.source or ""),
        "output_len": len(result.text or ""),
    }


def write_report(path: Path, rows: List[Dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
        w.writeheader()
        for r in rows:
            w.writerow(r)


def process_file(reassembler: Reassembler, path: Path) -> List[Dict[str, object]]:
    """Reassemble every line of ``path``, printing one result per line."""
    rows: List[Dict[str, object]] = []
    for line_no, line in enumerate(iter_lines(path), 1):
        result = reassembler.reassemble(line)
        print(result.render())
        rows.append(report_row(line_no, result))
        if not result.ok:
            log_debug(f"Line {line_no}: {result.error!r}")
    return rows


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description=(
            "Reassemble a string from overlapping ';'-delimited fragments, one problem per input line. "
            "Settings come from config.default.yaml merged with config.yaml; flags override both."
        )
    )
    ap.add_argument("input", nargs="?", help="Text file with one fragment list per line")
    ap.add_argument("--config-dir", default=None, help="Directory holding config.default.yaml / config.yaml")
    ap.add_argument("--delimiter", default=None, help="Fragment delimiter (default from config: ';')")
    ap.add_argument("--min-fragment-length", type=int, default=None, help="Reject lines whose shortest fragment is shorter")
    ap.add_argument("--report", default=None, help="Write a per-line CSV QC report to this path")
    ap.add_argument("--debug", action="store_true", help="Enable debug logging (fragments, heads, merges)")
    ap.add_argument("--trace", action="store_true", help="Enable trace logging: every candidate comparison (very verbose)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.input:
        print(ERR_NO_FILE_INPUT)
        return 1
    in_path = Path(args.input)
    if not in_path.is_file():
        print(ERR_FILE_NOT_EXISTS)
        return 1

    base = Path(args.config_dir) if args.config_dir else Path(__file__).parent.parent
    try:
        cfg, has_local = load_effective_config(base)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"FATAL: {exc}", file=sys.stderr)
        return 2

    level = resolve_log_level(config_log_level(cfg), debug=args.debug, trace=args.trace)
    set_log_level(level)
    log_debug(f"Config dir: {base} | local config: {has_local} | log level: {level}")

    try:
        reassembler = create_reassembler(
            cfg,
            min_fragment_length=args.min_fragment_length,
            delimiter=args.delimiter,
        )
    except ValueError as exc:
        log_error(f"Invalid reassembly settings: {exc}")
        return 2
    log_debug(
        f"Settings -> delimiter={reassembler.delimiter!r}, min_fragment_length={reassembler.min_fragment_length}"
    )

    rows = process_file(reassembler, in_path)
    failed = sum(1 for r in rows if r["status"] != "OK")
    log_debug(f"Processed {len(rows)} line(s): ok {len(rows) - failed}, failed {failed}")

    report = args.report or config_report_path(cfg)
    if report:
        try:
            write_report(Path(report), rows)
        except OSError as exc:
            log_warn(f"Could not write QC report {report}: {exc}")
        else:
            log_info(f"QC report: {report}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
