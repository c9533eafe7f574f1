"""Intermediate representation dataclasses for folded and parsed PDB records.

WHY: A PDB continuation record is spread over many fixed-column lines.
Each pipeline stage (classify, fold, tokenize, assemble) hands its result
to the next one, and callers receive typed records rather than raw text.
The IR gives every stage a small, well-typed contract.

HOW: Frozen dataclasses and enums form a hierarchy:
  PhysicalLine      - one classified input line (ephemeral)
  LogicalEntry      - the folded body of a run of lines
  TokenKind / Token - one typed key/value unit of a COMPND/SOURCE body
  Revision          - one parsed REVDAT modification entry
  RevisionOutcome   - per-entry success/failure of the REVDAT inner grammar
  Compound, Source, RevisionHistory, Title, Keywords - the typed records
  ParsedFile        - every supported record of one file, in file order

RULES:
- Everything except ParsedFile is immutable once built; list-like
  values are tuples
- LogicalEntry.body is the payload concatenation with no separator added
- LogicalEntry.entry_key is 0 for records without secondary grouping
- Token values are int, str, bool, tuple[str, ...] or tuple[int, ...]
- Records are plain data sinks; they never validate their contents
"""

from __future__ import annotations

import datetime
import enum
from collections import Counter
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple, Union

TokenValue = Union[int, str, bool, Tuple[str, ...], Tuple[int, ...]]


@dataclass(frozen=True)
class PhysicalLine:
    """A single classified input line.

    RULES:
    - continuation: 0 when the counter columns are blank (first/only line)
    - entry_key: None for layouts without a secondary grouping key
    - payload: raw bytes after the counter columns, padding not yet trimmed
    - offset: byte offset of the line start in the input
    - payload_offset: byte offset of the first payload byte in the input
    """

    record_tag: str
    continuation: int
    entry_key: Optional[int]
    payload: bytes
    offset: int = 0
    payload_offset: int = 0


@dataclass(frozen=True)
class LogicalEntry:
    """The folded body of one contiguous run of physical lines."""

    entry_key: int
    body: str
    line_count: int = 1


class TokenKind(enum.Enum):
    """Closed set of COMPND/SOURCE token keys.

    Each member's value is the literal key as it appears in the file,
    immediately followed by a colon.
    """

    MOLECULE = "MOLECULE"
    MOL_ID = "MOL_ID"
    CHAIN = "CHAIN"
    FRAGMENT = "FRAGMENT"
    SYNONYM = "SYNONYM"
    EC = "EC"
    ENGINEERED = "ENGINEERED"
    MUTATION = "MUTATION"
    OTHER_DETAILS = "OTHER_DETAILS"
    SYNTHETIC = "SYNTHETIC"
    ORGANISM_SCIENTIFIC = "ORGANISM_SCIENTIFIC"
    ORGANISM_COMMON = "ORGANISM_COMMON"
    ORGANISM_TAXID = "ORGANISM_TAXID"
    STRAIN = "STRAIN"
    VARIANT = "VARIANT"
    CELL_LINE = "CELL_LINE"
    ATCC = "ATCC"
    ORGAN = "ORGAN"
    TISSUE = "TISSUE"
    CELL = "CELL"
    ORGANELLE = "ORGANELLE"
    SECRETION = "SECRETION"
    CELLULAR_LOCATION = "CELLULAR_LOCATION"
    PLASMID = "PLASMID"
    GENE = "GENE"
    EXPRESSION_SYSTEM = "EXPRESSION_SYSTEM"
    EXPRESSION_SYSTEM_COMMON = "EXPRESSION_SYSTEM_COMMON"
    EXPRESSION_SYSTEM_TAXID = "EXPRESSION_SYSTEM_TAXID"
    EXPRESSION_SYSTEM_STRAIN = "EXPRESSION_SYSTEM_STRAIN"
    EXPRESSION_SYSTEM_VARIANT = "EXPRESSION_SYSTEM_VARIANT"
    EXPRESSION_SYSTEM_CELL_LINE = "EXPRESSION_SYSTEM_CELL_LINE"
    EXPRESSION_SYSTEM_ATCC_NUMBER = "EXPRESSION_SYSTEM_ATCC_NUMBER"
    EXPRESSION_SYSTEM_ORGAN = "EXPRESSION_SYSTEM_ORGAN"
    EXPRESSION_SYSTEM_TISSUE = "EXPRESSION_SYSTEM_TISSUE"
    EXPRESSION_SYSTEM_CELL = "EXPRESSION_SYSTEM_CELL"
    EXPRESSION_SYSTEM_ORGANELLE = "EXPRESSION_SYSTEM_ORGANELLE"
    EXPRESSION_SYSTEM_CELLULAR_LOCATION = "EXPRESSION_SYSTEM_CELLULAR_LOCATION"
    EXPRESSION_SYSTEM_VECTOR_TYPE = "EXPRESSION_SYSTEM_VECTOR_TYPE"
    EXPRESSION_SYSTEM_VECTOR = "EXPRESSION_SYSTEM_VECTOR"
    EXPRESSION_SYSTEM_PLASMID = "EXPRESSION_SYSTEM_PLASMID"
    EXPRESSION_SYSTEM_GENE = "EXPRESSION_SYSTEM_GENE"


@dataclass(frozen=True)
class Token:
    """One typed key/value unit extracted from a semicolon-delimited body."""

    kind: TokenKind
    value: TokenValue


class ModificationType(enum.IntEnum):
    """REVDAT ``modType`` column (PDB format v3.3)."""

    INITIAL_RELEASE = 0
    OTHER_MODIFICATION = 1


@dataclass(frozen=True)
class Revision:
    """One REVDAT modification entry.

    RULES:
    - modification_number comes from the entry key columns, never the body
    - modification_detail lists the record names touched by the revision
    """

    modification_number: int
    modification_date: datetime.date
    idcode: str
    modification_type: ModificationType
    modification_detail: Tuple[str, ...] = ()

    @classmethod
    def sentinel(cls) -> Revision:
        """The zero-valued entry substituted when an entry fails to parse."""
        return cls(
            modification_number=0,
            modification_date=datetime.date.min,
            idcode="",
            modification_type=ModificationType.INITIAL_RELEASE,
            modification_detail=(),
        )


@dataclass(frozen=True)
class RevisionOutcome:
    """Result of running the REVDAT inner grammar on one logical entry.

    Exactly one of ``revision`` and ``error`` is set.
    """

    entry: LogicalEntry
    revision: Optional[Revision] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class TokenRecord:
    """A record whose body is a semicolon-delimited token list.

    RULES:
    - tokens are kept verbatim: order and duplicates preserved
    - no check that MOL_ID (or any other key) is present
    """

    record_tag: ClassVar[str] = ""

    tokens: Tuple[Token, ...] = ()

    def values(self, kind: TokenKind) -> list[TokenValue]:
        """Return the value of every token of ``kind``, in order."""
        return [t.value for t in self.tokens if t.kind is kind]

    def molecules(self) -> list[Tuple[Token, ...]]:
        """Split the token stream into per-molecule groups.

        A new group starts at every MOL_ID token. Tokens that precede the
        first MOL_ID form a group of their own.
        """
        groups: list[Tuple[Token, ...]] = []
        current: list[Token] = []
        for token in self.tokens:
            if token.kind is TokenKind.MOL_ID and current:
                groups.append(tuple(current))
                current = []
            current.append(token)
        if current:
            groups.append(tuple(current))
        return groups


@dataclass(frozen=True)
class Compound(TokenRecord):
    """COMPND: the macromolecular contents of the entry."""

    record_tag: ClassVar[str] = "COMPND"


@dataclass(frozen=True)
class Source(TokenRecord):
    """SOURCE: the biological or chemical source of each molecule."""

    record_tag: ClassVar[str] = "SOURCE"


@dataclass(frozen=True)
class RevisionHistory:
    """REVDAT: the modification history of the entry, newest first.

    ``outcomes`` keeps the explicit per-entry success/failure results;
    ``revisions`` is the reference view where every failed entry is
    replaced by Revision.sentinel().
    """

    record_tag: ClassVar[str] = "REVDAT"

    outcomes: Tuple[RevisionOutcome, ...] = ()

    @property
    def revisions(self) -> Tuple[Revision, ...]:
        return tuple(
            o.revision if o.revision is not None else Revision.sentinel()
            for o in self.outcomes
        )

    @property
    def failures(self) -> Tuple[RevisionOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)


@dataclass(frozen=True)
class Title:
    """TITLE: free text describing the experiment."""

    record_tag: ClassVar[str] = "TITLE"

    text: str = ""


@dataclass(frozen=True)
class Keywords:
    """KEYWDS: comma-separated search keywords."""

    record_tag: ClassVar[str] = "KEYWDS"

    keywords: Tuple[str, ...] = ()


@dataclass
class ParsedFile:
    """Every supported record found in one PDB file, in file order.

    RULES:
    - records: typed records in the order their first line appears
    - skipped: count of lines per record tag that no parser handles
    - source_name: original file name (used for output naming)
    """

    records: list = field(default_factory=list)
    skipped: Counter = field(default_factory=Counter)
    source_name: str = ""

    def by_tag(self, tag: str) -> list:
        """Return every record whose record tag is ``tag``."""
        return [r for r in self.records if r.record_tag == tag]
