"""Leaf value grammars shared by the token and REVDAT parsers.

WHY: COMPND/SOURCE tokens and REVDAT entries are built from a handful of
repetitive value shapes: integers, words, comma-separated lists, YES/NO
flags and DD-MON-YY dates. Keeping each shape in one small function lets
the token table and the REVDAT grammar reuse them.

HOW: Every parser takes the raw value text plus the field key (used only
for error messages), trims incidental whitespace and either returns a
typed value or raises FieldFormatError with the unparsed remainder.

RULES:
- Values are trimmed before matching; an empty value is always an error
- parse_word accepts ASCII letters, digits and spaces only
- parse_phrase accepts any text (the ";" delimiter never reaches it)
- List parsers split on "," and trim each element; empty elements fail
- parse_yes_no accepts exactly "YES" and "NO" (case-sensitive)
- parse_date accepts DD-MON-YY; years 69-99 map to 19xx, 00-68 to 20xx
"""

from __future__ import annotations

import datetime
import re
from typing import Tuple

from pdb_records.core.errors import FieldFormatError
from pdb_records.core.ir import ModificationType

_WORD_RE = re.compile(r"[A-Za-z0-9 ]*")
_INTEGER_RE = re.compile(r"[0-9]+")
_EC_RE = re.compile(r"[0-9]+(?:\.(?:[0-9]+|-))*")
_IDCODE_RE = re.compile(r"[A-Za-z0-9]+")
_DATE_RE = re.compile(r"([0-9]{1,2})-([A-Z]{3})-([0-9]{2})")

MONTHS: Tuple[str, ...] = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

# Same pivot as strptime's %y.
_CENTURY_PIVOT = 69


def _require_value(text: str, key: str, expected: str) -> str:
    value = text.strip()
    if not value:
        raise FieldFormatError(key, text, expected)
    return value


def parse_integer(text: str, key: str = "integer") -> int:
    """Parse an unsigned decimal integer."""
    value = _require_value(text, key, "an unsigned integer")
    m = _INTEGER_RE.match(value)
    if m is None or m.end() != len(value):
        remainder = value[m.end():] if m else value
        raise FieldFormatError(key, remainder, "an unsigned integer")
    return int(value)


def parse_word(text: str, key: str = "word") -> str:
    """Parse a word that may contain embedded spaces (alphanumeric only)."""
    value = _require_value(text, key, "letters, digits and spaces")
    m = _WORD_RE.match(value)
    if m.end() != len(value):
        raise FieldFormatError(key, value[m.end():], "letters, digits and spaces")
    return value


def parse_phrase(text: str, key: str = "phrase") -> str:
    """Parse free text such as a molecule name."""
    return _require_value(text, key, "a non-empty phrase")


def _split_list(text: str, key: str, expected: str) -> list[str]:
    value = _require_value(text, key, expected)
    return [element.strip() for element in value.split(",")]


def parse_word_list(text: str, key: str = "word list") -> Tuple[str, ...]:
    """Parse a comma-separated list of words, e.g. chain identifiers."""
    return tuple(
        parse_word(element, key)
        for element in _split_list(text, key, "a comma-separated list of words")
    )


def parse_ec_list(text: str, key: str = "EC") -> Tuple[str, ...]:
    """Parse a comma-separated list of EC numbers such as ``3.2.1.14``."""
    numbers = []
    for element in _split_list(text, key, "a comma-separated list of EC numbers"):
        if not _EC_RE.fullmatch(element):
            raise FieldFormatError(key, element, "a dotted-decimal EC number")
        numbers.append(element)
    return tuple(numbers)


def parse_integer_list(text: str, key: str = "integer list") -> Tuple[int, ...]:
    """Parse a comma-separated list of unsigned integers (taxonomy ids)."""
    return tuple(
        parse_integer(element, key)
        for element in _split_list(text, key, "a comma-separated list of integers")
    )


def parse_yes_no(text: str, key: str = "flag") -> bool:
    """Parse the literal ``YES`` or ``NO``."""
    value = text.strip()
    if value == "YES":
        return True
    if value == "NO":
        return False
    raise FieldFormatError(key, value, "YES or NO")


def parse_date(text: str, key: str = "date") -> datetime.date:
    """Parse a ``DD-MON-YY`` date, e.g. ``12-SEP-09``."""
    value = _require_value(text, key, "a DD-MON-YY date")
    m = _DATE_RE.fullmatch(value)
    if m is None or m.group(2) not in MONTHS:
        raise FieldFormatError(key, value, "a DD-MON-YY date")
    day = int(m.group(1))
    month = MONTHS.index(m.group(2)) + 1
    year = int(m.group(3))
    year += 1900 if year >= _CENTURY_PIVOT else 2000
    try:
        return datetime.date(year, month, day)
    except ValueError as exc:
        raise FieldFormatError(key, value, "a valid calendar date") from exc


def parse_idcode(text: str, key: str = "idcode") -> str:
    """Parse a single alphanumeric identifier such as ``1ABC``."""
    value = _require_value(text, key, "an alphanumeric id code")
    if not _IDCODE_RE.fullmatch(value):
        raise FieldFormatError(key, value, "an alphanumeric id code")
    return value


def parse_idcode_list(text: str, key: str = "idcode list") -> Tuple[str, ...]:
    """Parse a space-separated list of identifiers; an empty list is allowed."""
    codes = []
    for word in text.split():
        if not _IDCODE_RE.fullmatch(word):
            raise FieldFormatError(key, word, "space-separated alphanumeric words")
        codes.append(word)
    return tuple(codes)


def parse_modification_type(text: str, key: str = "modification type") -> ModificationType:
    """Parse the REVDAT modification type column (``0`` or ``1``)."""
    value = parse_integer(text, key)
    try:
        return ModificationType(value)
    except ValueError as exc:
        raise FieldFormatError(key, text.strip(), "a known modification type (0 or 1)") from exc
