"""Continuation folding and entry grouping of physical lines.

WHY: A logical PDB record is spread over several physical lines with the
same record name. The field and token grammars must see one logical
body, not individual lines. Some record types (REVDAT) also multiplex
several independent entries in one line stream, keyed by a number in
fixed columns, and each entry has to be folded on its own.

HOW: collect_lines() applies the line classifier while lines keep the
expected tag. join_payloads() concatenates the payloads in physical
order. fold_continuation() wraps both into one LogicalEntry.
group_entries() splits the line sequence into maximal runs of equal
entry key (itertools.groupby, adjacency only) and folds each run.

RULES:
- Matching stops, without consuming, at the first foreign line or end of input
- Payloads lose their trailing column padding, nothing else
- No separator is inserted between payload fragments
- Continuation counters are accepted but never used to reorder lines
- Arity is per call: required=True is one-or-more, False is zero-or-more
- Grouping is by contiguous equal key: keys [1, 1, 2, 2, 1] give 3 entries
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Tuple

from pdb_records.core.errors import MissingRecordError, PayloadEncodingError
from pdb_records.core.ir import LogicalEntry, PhysicalLine
from pdb_records.core.lines import LineLayout, classify_line, has_tag

logger = logging.getLogger(__name__)

# Trailing fixed-column padding removed from every payload before joining.
_PADDING = b" \t"


def collect_lines(data: bytes, offset: int, layout: LineLayout) -> Tuple[List[PhysicalLine], int]:
    """Classify consecutive lines carrying ``layout.tag``.

    Returns:
        The matched lines in physical order and the offset just past the
        last one (equal to ``offset`` when nothing matched).
    """
    lines: List[PhysicalLine] = []
    cursor = offset
    while cursor < len(data) and has_tag(data, cursor, layout):
        line, cursor = classify_line(data, cursor, layout)
        lines.append(line)
    return lines, cursor


def join_payloads(lines: Iterable[PhysicalLine]) -> str:
    """Concatenate line payloads into one UTF-8 body.

    Raises:
        PayloadEncodingError: The concatenated bytes are not valid UTF-8.
            Its offset is the input position of the first bad byte.
    """
    lines = list(lines)
    pieces = [line.payload.rstrip(_PADDING) for line in lines]
    try:
        return b"".join(pieces).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PayloadEncodingError(_input_offset(lines, pieces, exc.start), exc.reason) from exc


def _input_offset(lines: List[PhysicalLine], pieces: List[bytes], index: int) -> int:
    """Map an index into the joined payload back to an input byte offset."""
    for line, piece in zip(lines, pieces):
        if index < len(piece):
            return line.payload_offset + index
        index -= len(piece)
    return lines[-1].payload_offset + len(pieces[-1])


def fold_continuation(
    data: bytes,
    offset: int,
    layout: LineLayout,
    required: bool = True,
) -> Tuple[LogicalEntry, int]:
    """Fold a run of ``layout.tag`` lines into a single logical body.

    Args:
        data: The whole input buffer.
        offset: Byte offset where the run is expected to start.
        layout: Column layout of the record type.
        required: True for one-or-more lines, False for zero-or-more.

    Returns:
        The folded LogicalEntry (entry_key 0) and the number of bytes consumed.

    Raises:
        MissingRecordError: ``required`` is set and no line matched.
        MalformedLineError: A line with the right tag has bad columns.
        PayloadEncodingError: The folded payload is not valid UTF-8.
    """
    lines, end = collect_lines(data, offset, layout)
    if not lines:
        if required:
            raise MissingRecordError(offset, layout.tag)
        return LogicalEntry(entry_key=0, body="", line_count=0), 0

    body = join_payloads(lines)
    logger.debug("Folded %d %s line(s) at byte %d", len(lines), layout.tag, offset)
    return LogicalEntry(entry_key=0, body=body, line_count=len(lines)), end - offset


def group_entries(lines: Iterable[PhysicalLine]) -> List[LogicalEntry]:
    """Partition lines into maximal contiguous runs of equal entry key.

    Non-contiguous runs sharing a key are NOT merged.
    """
    entries: List[LogicalEntry] = []
    for key, run in itertools.groupby(lines, key=lambda line: line.entry_key):
        run_lines = list(run)
        entries.append(LogicalEntry(
            entry_key=key if key is not None else 0,
            body=join_payloads(run_lines),
            line_count=len(run_lines),
        ))
    return entries


def fold_entries(
    data: bytes,
    offset: int,
    layout: LineLayout,
    required: bool = False,
) -> Tuple[List[LogicalEntry], int]:
    """Fold a run of grouped lines into one LogicalEntry per entry-key run.

    Returns:
        Entries in run-encounter order and the number of bytes consumed.

    Raises:
        MissingRecordError: ``required`` is set and no line matched.
        MalformedLineError: A line with the right tag has bad columns.
        PayloadEncodingError: An entry's folded payload is not valid UTF-8.
    """
    lines, end = collect_lines(data, offset, layout)
    if not lines and required:
        raise MissingRecordError(offset, layout.tag)

    entries = group_entries(lines)
    logger.debug(
        "Grouped %d %s line(s) into %d entr%s at byte %d",
        len(lines), layout.tag, len(entries), "y" if len(entries) == 1 else "ies", offset,
    )
    return entries, end - offset
