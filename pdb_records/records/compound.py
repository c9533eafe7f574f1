"""COMPND record parser.

WHY: The COMPND record describes the macromolecular contents of an
entry as a semicolon-delimited list of predefined tokens spread over
many continuation lines.

HOW: Fold the COMPND lines (one-or-more) into one body, run the token
grammar over it, and assemble the tokens into a Compound.

Record layout:

| COLUMNS | DATA TYPE          | FIELD        | DEFINITION                                |
|---------|--------------------|--------------|-------------------------------------------|
| 1 -  6  | Record name        | "COMPND"     |                                           |
| 8 - 10  | Continuation       | continuation | Allows concatenation of multiple records. |
| 11 - 80 | Specification list | compound     | Description of the molecular components.  |
"""

from __future__ import annotations

from typing import Tuple

from pdb_records.config import COMPND_LAYOUT
from pdb_records.core.assembler import assemble_compound
from pdb_records.core.folding import fold_continuation
from pdb_records.core.ir import Compound
from pdb_records.core.lines import LineLayout
from pdb_records.core.tokens import parse_tokens
from pdb_records.records.base import BaseRecordParser


class CompoundParser(BaseRecordParser):
    """Parses a COMPND record into a Compound."""

    @property
    def layout(self) -> LineLayout:
        return COMPND_LAYOUT

    def parse(self, data: bytes, offset: int = 0) -> Tuple[Compound, int]:
        entry, consumed = fold_continuation(data, offset, self.layout, required=True)
        return assemble_compound(parse_tokens(entry.body)), consumed
