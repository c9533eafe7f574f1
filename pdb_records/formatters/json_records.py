"""JSON export of parsed records, validated against the bundled schema.

WHY: Downstream tools (notebooks, databases, web viewers) want the typed
records without re-implementing the fixed-column PDB grammar. JSON is
the lowest common denominator, and validating against a schema keeps the
export contract honest.

HOW: Each record type is converted by a small function into a plain
dict. Tokens become {"key", "value"} pairs with tuples turned into
lists. REVDAT entries include the explicit ok/error outcome alongside
the (possibly sentinel) revision values. The full document is checked
with jsonschema before it is returned.

RULES:
- Records keep file order; tokens keep body order
- Dates are ISO 8601 (sentinel entries read "0001-01-01")
- Modification types are written by name
- Validate output against records.schema.json; raise on failure
- Output suffix: "-records.json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from pdb_records.core.ir import (
    Keywords,
    ParsedFile,
    Revision,
    RevisionHistory,
    Title,
    Token,
    TokenRecord,
)
from pdb_records.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "records.schema.json"


def _load_schema() -> dict[str, Any]:
    """Load the export JSON schema from disk.

    Cached at module level after first call to avoid repeated I/O.
    """
    with open(_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        _CACHED_SCHEMA = _load_schema()
    return _CACHED_SCHEMA


def _token_to_dict(token: Token) -> dict[str, Any]:
    value = token.value
    if isinstance(value, tuple):
        value = list(value)
    return {"key": token.kind.value, "value": value}


def _revision_to_dict(revision: Revision, entry_key: int, error: Exception | None) -> dict[str, Any]:
    return {
        "ok": error is None,
        "entry_key": entry_key,
        "modification_number": revision.modification_number,
        "modification_date": revision.modification_date.isoformat(),
        "idcode": revision.idcode,
        "modification_type": revision.modification_type.name,
        "modification_detail": list(revision.modification_detail),
        "error": str(error) if error is not None else None,
    }


def record_to_dict(record: Any) -> dict[str, Any]:
    """Convert one typed record into its JSON-ready dict."""
    if isinstance(record, TokenRecord):
        return {
            "type": record.record_tag,
            "tokens": [_token_to_dict(t) for t in record.tokens],
        }
    if isinstance(record, RevisionHistory):
        revisions = [
            _revision_to_dict(revision, outcome.entry.entry_key, outcome.error)
            for outcome, revision in zip(record.outcomes, record.revisions)
        ]
        return {"type": record.record_tag, "revisions": revisions}
    if isinstance(record, Title):
        return {"type": record.record_tag, "text": record.text}
    if isinstance(record, Keywords):
        return {"type": record.record_tag, "keywords": list(record.keywords)}
    raise TypeError("No JSON conversion for record type {}".format(type(record).__name__))


class JsonRecordsFormatter(BaseFormatter):
    """Exports every parsed record as one schema-validated JSON document."""

    @property
    def name(self) -> str:
        return "JSON records"

    def format(self, parsed: ParsedFile) -> list[FormatterOutput]:
        """Raises jsonschema.ValidationError if the document breaks the schema."""
        document: dict[str, Any] = {
            "source": parsed.source_name,
            "records": [record_to_dict(r) for r in parsed.records],
            "skipped": dict(parsed.skipped),
        }

        jsonschema.validate(instance=document, schema=_get_schema())

        return [FormatterOutput(
            suffix="-records.json",
            content=json.dumps(document, indent=2, ensure_ascii=False),
        )]
