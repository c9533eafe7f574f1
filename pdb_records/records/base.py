"""Abstract base record parser.

WHY: The file reader, the CLI and tests need to run any supported record
type the same way: hand it the input buffer and an offset, get a typed
record back plus the number of bytes it consumed. This base class fixes
that interface so the registry can treat every record type generically.

HOW: BaseRecordParser is an ABC with two requirements: a ``layout``
property (the record's column layout, which also supplies the tag) and
a ``parse()`` method.

RULES:
- parse() starts at a line carrying ``tag`` and consumes the whole run
  of consecutive lines with that tag
- parse() returns (record, bytes_consumed)
- Parsers are stateless apart from constructor options; one instance
  can parse any number of inputs

To add a new record type:
1. Create a new module in records/
2. Subclass BaseRecordParser
3. Implement layout and parse()
4. Register in RECORD_PARSERS in records/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Tuple

from pdb_records.core.lines import LineLayout


class BaseRecordParser(ABC):
    """Abstract base for all record parsers."""

    @property
    @abstractmethod
    def layout(self) -> LineLayout:
        """Column layout of the record type."""

    @property
    def tag(self) -> str:
        return self.layout.tag

    @abstractmethod
    def parse(self, data: bytes, offset: int = 0) -> Tuple[Any, int]:
        """Parse the run of ``tag`` lines starting at ``offset``.

        Args:
            data: The whole input buffer.
            offset: Byte offset of the first line of the record.

        Returns:
            The typed record and the number of bytes consumed.
        """
