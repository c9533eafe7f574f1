"""Plain text summary of parsed records.

WHY: Curators reviewing an entry want a quick readable digest of its
title, molecules, sources and revision history, without JSON or the
fixed-column layout.

HOW: One block per record, in file order, separated by a blank line.
COMPND and SOURCE blocks list each MOL_ID group on its own line as
``KEY=value`` pairs. REVDAT lists one revision per line and marks the
entries that failed to parse.

RULES:
- List values are joined with ", "; flags print as YES/NO
- Failed REVDAT entries print "(unparsed)" with the original body
- No trailing whitespace on any line
- Output suffix: "-records.txt"
"""

from __future__ import annotations

from typing import Any, List

from pdb_records.core.ir import (
    Keywords,
    ParsedFile,
    RevisionHistory,
    Title,
    Token,
    TokenRecord,
)
from pdb_records.formatters.base import BaseFormatter, FormatterOutput


def _format_value(token: Token) -> str:
    value = token.value
    if isinstance(value, bool):
        return "YES" if value else "NO"
    if isinstance(value, tuple):
        return ", ".join(str(v) for v in value)
    return str(value)


def _token_record_lines(record: TokenRecord) -> List[str]:
    lines = ["{}:".format(record.record_tag)]
    for group in record.molecules():
        pairs = ["{}={}".format(t.kind.value, _format_value(t)) for t in group]
        lines.append("  " + "; ".join(pairs))
    return lines


def _revision_lines(record: RevisionHistory) -> List[str]:
    lines = ["REVDAT:"]
    for outcome in record.outcomes:
        revision = outcome.revision
        if revision is None:
            lines.append("  {:>3}  (unparsed) {}".format(
                outcome.entry.entry_key, " ".join(outcome.entry.body.split())
            ))
            continue
        detail = " ".join(revision.modification_detail)
        line = "  {:>3}  {}  {}  {}".format(
            revision.modification_number,
            revision.modification_date.isoformat(),
            revision.idcode,
            revision.modification_type.name,
        )
        lines.append("{}  {}".format(line, detail) if detail else line)
    return lines


def _record_lines(record: Any) -> List[str]:
    if isinstance(record, TokenRecord):
        return _token_record_lines(record)
    if isinstance(record, RevisionHistory):
        return _revision_lines(record)
    if isinstance(record, Title):
        return ["TITLE:", "  " + record.text]
    if isinstance(record, Keywords):
        return ["KEYWDS:", "  " + ", ".join(record.keywords)]
    raise TypeError("No text conversion for record type {}".format(type(record).__name__))


class PlainTextFormatter(BaseFormatter):
    """Human-readable digest of every parsed record."""

    @property
    def name(self) -> str:
        return "Plain text summary"

    def format(self, parsed: ParsedFile) -> list[FormatterOutput]:
        blocks = ["\n".join(line.rstrip() for line in _record_lines(r)) for r in parsed.records]
        content = "\n\n".join(blocks)
        if content:
            content += "\n"
        return [FormatterOutput(
            suffix="-records.txt",
            content=content,
        )]
