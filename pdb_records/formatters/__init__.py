"""Export formats selectable from the CLI.

FORMATTERS maps each ``--formats`` key to its formatter class. The CLI
validates the requested keys against this dict, then instantiates each
class once per run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdb_records.formatters.json_records import JsonRecordsFormatter
from pdb_records.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from pdb_records.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json": JsonRecordsFormatter,
    "plain_text": PlainTextFormatter,
}
