"""TITLE and KEYWDS record parsers: plain continuation records.

Neither record has a token grammar: TITLE is free text and KEYWDS a
comma-separated list, so both only need the continuation folder.
"""

from __future__ import annotations

from typing import Tuple

from pdb_records.config import KEYWDS_LAYOUT, TITLE_LAYOUT
from pdb_records.core.assembler import assemble_keywords, assemble_title
from pdb_records.core.folding import fold_continuation
from pdb_records.core.ir import Keywords, Title
from pdb_records.core.lines import LineLayout
from pdb_records.records.base import BaseRecordParser


class TitleParser(BaseRecordParser):

    @property
    def layout(self) -> LineLayout:
        return TITLE_LAYOUT

    def parse(self, data: bytes, offset: int = 0) -> Tuple[Title, int]:
        entry, consumed = fold_continuation(data, offset, self.layout, required=True)
        return assemble_title(entry.body), consumed


class KeywordsParser(BaseRecordParser):

    @property
    def layout(self) -> LineLayout:
        return KEYWDS_LAYOUT

    def parse(self, data: bytes, offset: int = 0) -> Tuple[Keywords, int]:
        entry, consumed = fold_continuation(data, offset, self.layout, required=True)
        # Empty items come from a trailing comma or a line ending in ", ".
        keywords = (" ".join(k.split()) for k in entry.body.split(","))
        return assemble_keywords(k for k in keywords if k), consumed
