"""Physical line classification for fixed-column PDB records.

WHY: Every continuation record starts each physical line with a
six-column record name followed by fixed-width counter columns. The
folders need to know, for a line, whether it belongs to the record
being read, which continuation/entry it carries and what its payload is.

HOW: A LineLayout describes the columns of one record type. has_tag()
answers "does the line at this offset belong to this record?" without
consuming anything. classify_line() consumes one whole line (including
its terminator) and returns a PhysicalLine plus the new offset.

RULES:
- Tag match is exact and case-sensitive, followed by a blank column
- The columns between the tag and the first counter must be blank
- Blank counter columns mean 0; non-digit counter columns are an error
- Payload is everything from payload_start to the terminator, untrimmed
- Accepted terminators: "\\n" and "\\r\\n"; a missing terminator is an error
- Pure: no state, no I/O
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pdb_records.core.errors import MalformedLineError
from pdb_records.core.ir import PhysicalLine

_BLANK = b" \t"


@dataclass(frozen=True)
class LineLayout:
    """Column layout of one record type (0-based slices into the line).

    Attributes:
        tag: Record name literal, e.g. ``"COMPND"``.
        continuation: Columns of the continuation counter.
        payload_start: First column of the payload.
        entry_key: Columns of the secondary grouping key, if any.
    """

    tag: str
    continuation: slice
    payload_start: int
    entry_key: Optional[slice] = None

    @property
    def tag_bytes(self) -> bytes:
        return self.tag.encode("ascii")

    @property
    def first_field_start(self) -> int:
        starts = [self.continuation.start]
        if self.entry_key is not None:
            starts.append(self.entry_key.start)
        return min(starts)


def has_tag(data: bytes, offset: int, layout: LineLayout) -> bool:
    """Return True if the line starting at ``offset`` carries the layout's tag."""
    tag = layout.tag_bytes
    end = offset + len(tag)
    if data[offset:end] != tag:
        return False
    # The tag must be the whole record name: "COMPND" does not match "COMPNDX".
    following = data[end:end + 1]
    return following in (b"", b" ", b"\t", b"\r", b"\n")


def _read_counter(line: bytes, columns: slice, offset: int, what: str) -> int:
    field = line[columns].strip(_BLANK)
    if not field:
        return 0
    if not field.isdigit():
        width = columns.stop - columns.start
        raise MalformedLineError(
            offset,
            "{} as an unsigned integer of at most {} digits in columns {}-{}, got {!r}".format(
                what, width, columns.start + 1, columns.stop, field.decode("latin-1")
            ),
        )
    return int(field)


def classify_line(data: bytes, offset: int, layout: LineLayout) -> Tuple[PhysicalLine, int]:
    """Consume one physical line of ``layout``'s record type.

    Args:
        data: The whole input buffer.
        offset: Byte offset of the line start.
        layout: Column layout of the expected record type.

    Returns:
        The classified line and the offset just past its terminator.

    Raises:
        MalformedLineError: Tag mismatch, unparseable counter or entry
            key columns, or no line terminator before end of input.
    """
    if not has_tag(data, offset, layout):
        raise MalformedLineError(offset, "record tag {!r}".format(layout.tag))

    end = data.find(b"\n", offset)
    if end == -1:
        raise MalformedLineError(offset, "a line terminator after the {} line".format(layout.tag))

    line = data[offset:end]
    if line.endswith(b"\r"):
        line = line[:-1]

    gap = line[len(layout.tag_bytes):layout.first_field_start]
    if gap.strip(_BLANK):
        raise MalformedLineError(
            offset,
            "blank columns {}-{} after the record tag".format(
                len(layout.tag_bytes) + 1, layout.first_field_start
            ),
        )

    continuation = _read_counter(line, layout.continuation, offset, "continuation counter")
    entry_key = None
    if layout.entry_key is not None:
        entry_key = _read_counter(line, layout.entry_key, offset, "entry key")

    physical = PhysicalLine(
        record_tag=layout.tag,
        continuation=continuation,
        entry_key=entry_key,
        payload=line[layout.payload_start:],
        offset=offset,
        payload_offset=offset + layout.payload_start,
    )
    return physical, end + 1
