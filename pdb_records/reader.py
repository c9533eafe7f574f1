"""File-level driver: dispatch PDB lines to record parsers by tag.

WHY: A PDB file interleaves many record types. The record parsers each
consume one run of their own lines; something has to walk the file,
recognise which record starts at the current line and hand over to the
right parser, skipping the record types this package does not handle.

HOW: read_records() keeps a byte cursor. At each line it asks every
registered parser whether its tag starts the line. The first match
parses its whole run and the cursor advances by the bytes it consumed;
otherwise the line is skipped and its tag counted. read_file() reads the
bytes from disk and delegates.

RULES:
- str input is encoded as UTF-8 before parsing
- Records are returned in file order; a record type whose lines appear
  in two separate runs yields two records
- Unhandled lines are skipped and counted per tag, never an error
- Parse errors from a record parser propagate unchanged
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from pdb_records.core.ir import ParsedFile
from pdb_records.core.lines import has_tag
from pdb_records.records import RECORD_PARSERS
from pdb_records.records.base import BaseRecordParser
from pdb_records.records.revision import RevisionParser

logger = logging.getLogger(__name__)


def build_parsers(revdat_policy: Optional[str] = None) -> List[BaseRecordParser]:
    """Instantiate every registered record parser."""
    parsers: List[BaseRecordParser] = []
    for cls in RECORD_PARSERS.values():
        if issubclass(cls, RevisionParser):
            parsers.append(cls(policy=revdat_policy))
        else:
            parsers.append(cls())
    return parsers


def _skip_line(data: bytes, offset: int) -> int:
    end = data.find(b"\n", offset)
    return len(data) if end == -1 else end + 1


def read_records(
    data: Union[bytes, str],
    revdat_policy: Optional[str] = None,
    source_name: str = "",
) -> ParsedFile:
    """Parse every supported record in a PDB file's contents.

    Args:
        data: File contents as bytes (or str, encoded as UTF-8).
        revdat_policy: "sentinel" or "strict"; None uses the environment.
        source_name: Original file name, kept on the result.

    Returns:
        ParsedFile with the records in file order and skipped-tag counts.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    parsers = build_parsers(revdat_policy)
    result = ParsedFile(source_name=source_name)
    offset = 0

    while offset < len(data):
        parser = next((p for p in parsers if has_tag(data, offset, p.layout)), None)
        if parser is None:
            tag = data[offset:offset + 6].decode("ascii", "replace").strip()
            result.skipped[tag] += 1
            offset = _skip_line(data, offset)
            continue

        record, consumed = parser.parse(data, offset)
        logger.debug("Parsed %s record at byte %d (%d bytes)", parser.tag, offset, consumed)
        result.records.append(record)
        offset += consumed

    if result.skipped:
        logger.debug("Skipped lines by tag: %s", dict(result.skipped))
    return result


def read_file(path: Union[str, Path], revdat_policy: Optional[str] = None) -> ParsedFile:
    """Read a PDB file from disk and parse its supported records."""
    path = Path(path)
    return read_records(path.read_bytes(), revdat_policy=revdat_policy, source_name=path.name)
