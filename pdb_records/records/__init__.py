"""Record parser registry: one parser per supported record tag.

WHY: The file reader and the CLI need a single lookup to find the right
parser for a line's record tag. A central dict makes adding a record
type trivial: write the parser class, import it here, add one line.

HOW: RECORD_PARSERS maps record tags to parser *classes* (not instances).
Callers instantiate as needed: ``parser = RECORD_PARSERS["COMPND"]()``.

RULES:
- Keys are the record tags exactly as they appear in columns 1-6
- Values are BaseRecordParser subclasses (not instances)
- RevisionParser takes an optional ``policy`` keyword; the others take none
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdb_records.records.compound import CompoundParser
from pdb_records.records.revision import RevisionParser
from pdb_records.records.source import SourceParser
from pdb_records.records.title import KeywordsParser, TitleParser

if TYPE_CHECKING:
    from pdb_records.records.base import BaseRecordParser

RECORD_PARSERS: dict[str, type[BaseRecordParser]] = {
    "TITLE": TitleParser,
    "COMPND": CompoundParser,
    "SOURCE": SourceParser,
    "KEYWDS": KeywordsParser,
    "REVDAT": RevisionParser,
}
