"""Command-line interface for pdb-records.

WHY: Users need a simple way to pull the continuation records out of a
PDB file from the terminal. The CLI wires together the full pipeline:
file reading, record dispatch, folding, token parsing, pluggable export
formatters and file saving, behind a single command.

HOW: Uses argparse to accept an input file, export format selection,
output directory, REVDAT failure policy and log level. Status messages go
to stderr; output files are saved next to the source (or to --output-dir).

RULES:
- Positional argument: input PDB file path
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-records-2.json)
- Status output goes to stderr (not stdout)
- Parse errors exit with status 1 and an "Error: ..." line
"""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pdb_records.config import LOG_LEVELS, REVDAT_POLICIES, load_log_level, load_revdat_policy
from pdb_records.core.errors import RecordParseError
from pdb_records.formatters import FORMATTERS
from pdb_records.formatters.base import FormatterOutput
from pdb_records.reader import read_file


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Pick a name for ``{stem}{suffix}`` that no earlier export holds.

    A second run over 1abc.pdb writes 1abc-records-2.json rather than
    replacing 1abc-records.json.
    """
    path = output_dir / (stem + suffix)
    if not path.exists():
        return path

    head, dot, ext = suffix.rpartition(".")
    if not head:
        head, dot, ext = suffix, "", ""
    for n in itertools.count(2):
        path = output_dir / "{}{}-{}{}{}".format(stem, head, n, dot, ext)
        if not path.exists():
            return path


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _run(args: argparse.Namespace) -> None:
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",")]
        for key in format_keys:
            if key not in FORMATTERS:
                available = ", ".join(sorted(FORMATTERS.keys()))
                _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    else:
        format_keys = list(FORMATTERS.keys())

    _status("Reading {}...".format(input_path.name))
    try:
        parsed = read_file(input_path, revdat_policy=args.revdat_policy)
    except RecordParseError as e:
        _fail(str(e))

    _status("  Parsed {} record(s), skipped {} other line(s)".format(
        len(parsed.records), sum(parsed.skipped.values())
    ))
    for history in parsed.by_tag("REVDAT"):
        if history.failures:
            _status("  Warning: {} REVDAT entr{} could not be parsed".format(
                len(history.failures), "y" if len(history.failures) == 1 else "ies"
            ))

    stem = input_path.stem
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(parsed):
            saved_path = _save_output(output, stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="pdb-records",
        description="Parse PDB continuation records (TITLE, COMPND, SOURCE, KEYWDS, "
                    "REVDAT) and export them as JSON or plain text.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the PDB file to parse.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--revdat-policy",
        choices=REVDAT_POLICIES,
        default=None,
        help="What to do with a REVDAT entry that fails to parse: substitute an "
             "empty entry (sentinel) or stop (strict). "
             "Default: PDB_RECORDS_REVDAT_POLICY or sentinel.",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level. Default: PDB_RECORDS_LOG_LEVEL or WARNING.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``pdb-records`` and ``python -m pdb_records``.

    argv=None means use sys.argv; explicit argv is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level is None:
        try:
            args.log_level = load_log_level()
        except ValueError as e:
            _fail(str(e))

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.revdat_policy is None:
        try:
            args.revdat_policy = load_revdat_policy()
        except ValueError as e:
            _fail(str(e))

    _run(args)


if __name__ == "__main__":
    main()
