"""Record assembly from parsed tokens and per-entry outcomes.

WHY: The token grammar produces a flat token list and the REVDAT grammar
produces one outcome per logical entry. Callers want typed records.
This module is the last step of the pipeline and the only place that
builds the record dataclasses from parsed pieces.

HOW: Each function copies its input into the matching immutable record.
Nothing is filtered, reordered or validated.

RULES:
- Token order and duplicates are preserved verbatim
- No check that MOL_ID or any other key is present
- Outcome order is preserved, failed outcomes included
- Assembly never raises on its own
"""

from __future__ import annotations

from typing import Iterable

from pdb_records.core.ir import (
    Compound,
    Keywords,
    RevisionHistory,
    RevisionOutcome,
    Source,
    Title,
    Token,
)


def assemble_compound(tokens: Iterable[Token]) -> Compound:
    return Compound(tokens=tuple(tokens))


def assemble_source(tokens: Iterable[Token]) -> Source:
    return Source(tokens=tuple(tokens))


def assemble_revisions(outcomes: Iterable[RevisionOutcome]) -> RevisionHistory:
    """Collect per-entry REVDAT outcomes into a RevisionHistory."""
    return RevisionHistory(outcomes=tuple(outcomes))


def assemble_title(text: str) -> Title:
    """Build a Title, collapsing the runs of blanks left by column padding."""
    return Title(text=" ".join(text.split()))


def assemble_keywords(keywords: Iterable[str]) -> Keywords:
    return Keywords(keywords=tuple(keywords))
