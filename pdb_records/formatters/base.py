"""Export formatter interface.

WHY: A ParsedFile can be written out in more than one shape (a JSON
document for tools, a text digest for people). The CLI should not care
which; it asks each selected formatter for files and saves them.

HOW: A formatter turns one ParsedFile into FormatterOutput items, each a
file-name suffix plus text content. Naming the file is left to the
caller, which knows the input file stem and the output directory.

RULES:
- ``suffix`` begins with "-" and ends with the file extension
- ``content`` is text; the caller writes it as UTF-8
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pdb_records.core.ir import ParsedFile


@dataclass
class FormatterOutput:
    """Text of one export file and the suffix its name ends with."""

    suffix: str
    content: str


class BaseFormatter(ABC):
    """One export format; register subclasses in ``FORMATTERS``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Label shown in CLI status lines."""

    @abstractmethod
    def format(self, parsed: ParsedFile) -> list[FormatterOutput]:
        """Render every record of ``parsed``.

        Most formats produce a single file; the list leaves room for
        formats that split records across several.
        """
