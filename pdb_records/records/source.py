"""SOURCE record parser.

The SOURCE record uses the same specification-list token grammar as
COMPND (organism, expression system and related keys), one molecule per
MOL_ID group.

| COLUMNS | DATA TYPE          | FIELD        | DEFINITION                                |
|---------|--------------------|--------------|-------------------------------------------|
| 1 -  6  | Record name        | "SOURCE"     |                                           |
| 8 - 10  | Continuation       | continuation | Allows concatenation of multiple records. |
| 11 - 79 | Specification list | srcName      | Identifies the source of the molecule.    |
"""

from __future__ import annotations

from typing import Tuple

from pdb_records.config import SOURCE_LAYOUT
from pdb_records.core.assembler import assemble_source
from pdb_records.core.folding import fold_continuation
from pdb_records.core.ir import Source
from pdb_records.core.lines import LineLayout
from pdb_records.core.tokens import parse_tokens
from pdb_records.records.base import BaseRecordParser


class SourceParser(BaseRecordParser):

    @property
    def layout(self) -> LineLayout:
        return SOURCE_LAYOUT

    def parse(self, data: bytes, offset: int = 0) -> Tuple[Source, int]:
        entry, consumed = fold_continuation(data, offset, self.layout, required=True)
        return assemble_source(parse_tokens(entry.body)), consumed
