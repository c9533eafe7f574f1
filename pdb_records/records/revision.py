"""REVDAT record parser: grouped continuation record.

WHY: REVDAT lists every modification made to an entry. Several
independent modifications share one line stream; the modification
number in columns 8-10 says which entry a line belongs to, and a long
entry may continue on further lines with the same number.

HOW: fold_entries() partitions the REVDAT lines into contiguous runs of
equal modification number and folds each run into one body. The inner
grammar reads a date, an id code, the modification type and a trailing
list of record names from each body. The entry key from the line
columns is stamped onto the result as the modification number.

RULES:
- The modification number comes from the entry key columns, not the body
- Non-contiguous runs with the same number stay separate entries
- policy="sentinel" (default): a failing entry is kept as a failed
  RevisionOutcome, logged, and reads as Revision.sentinel()
- policy="strict": the first failing entry's FieldFormatError propagates

Record layout:

| COLUMNS | DATA TYPE     | FIELD     | DEFINITION                                  |
|---------|---------------|-----------|---------------------------------------------|
| 1 -  6  | Record name   | "REVDAT"  |                                             |
| 8 - 10  | Integer       | modNum    | Modification number.                        |
| 11 - 12 | Continuation  | continue  | Allows concatenation of multiple records.   |
| 14 - 22 | Date          | modDate   | Date of modification (DD-MON-YY).           |
| 24 - 27 | IDcode        | modId     | ID code of this entry.                      |
| 32      | Integer       | modType   | 0 = initial release, 1 = other.             |
| 40 - 66 | Record name   | record    | Names of the modified records.              |
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from pdb_records.config import REVDAT_LAYOUT, REVDAT_POLICIES, load_revdat_policy
from pdb_records.core.assembler import assemble_revisions
from pdb_records.core.errors import FieldFormatError
from pdb_records.core.folding import fold_entries
from pdb_records.core.ir import LogicalEntry, Revision, RevisionHistory, RevisionOutcome
from pdb_records.core.lines import LineLayout
from pdb_records.core.primitives import (
    parse_date,
    parse_idcode,
    parse_idcode_list,
    parse_modification_type,
)
from pdb_records.records.base import BaseRecordParser

logger = logging.getLogger(__name__)


def parse_revision_body(body: str, modification_number: int = 0) -> Revision:
    """Run the REVDAT inner grammar over one folded entry body.

    Raises:
        FieldFormatError: The body is not "date idcode type [records...]".
    """
    fields = body.split(None, 3)
    if len(fields) < 3:
        raise FieldFormatError(
            "REVDAT", body.strip(), "DD-MON-YY date, id code and modification type"
        )
    detail = fields[3] if len(fields) == 4 else ""
    return Revision(
        modification_number=modification_number,
        modification_date=parse_date(fields[0], "REVDAT modDate"),
        idcode=parse_idcode(fields[1], "REVDAT modId"),
        modification_type=parse_modification_type(fields[2], "REVDAT modType"),
        modification_detail=parse_idcode_list(detail, "REVDAT record"),
    )


class RevisionParser(BaseRecordParser):
    """Parses a REVDAT record into a RevisionHistory.

    Args:
        policy: "sentinel" or "strict"; None reads PDB_RECORDS_REVDAT_POLICY.
    """

    def __init__(self, policy: Optional[str] = None) -> None:
        if policy is None:
            policy = load_revdat_policy()
        if policy not in REVDAT_POLICIES:
            raise ValueError(
                "Unknown REVDAT policy {!r}. Use one of: {}.".format(
                    policy, ", ".join(REVDAT_POLICIES)
                )
            )
        self.policy = policy

    @property
    def layout(self) -> LineLayout:
        return REVDAT_LAYOUT

    def parse_entry(self, entry: LogicalEntry) -> RevisionOutcome:
        """Parse one logical entry, applying the failure policy."""
        try:
            revision = parse_revision_body(entry.body, entry.entry_key)
        except FieldFormatError as exc:
            if self.policy == "strict":
                raise
            logger.warning(
                "REVDAT entry %d could not be parsed, substituting an empty entry: %s",
                entry.entry_key, exc,
            )
            return RevisionOutcome(entry=entry, error=exc)
        return RevisionOutcome(entry=entry, revision=revision)

    def parse(self, data: bytes, offset: int = 0) -> Tuple[RevisionHistory, int]:
        entries, consumed = fold_entries(data, offset, self.layout, required=True)
        return assemble_revisions(self.parse_entry(e) for e in entries), consumed
