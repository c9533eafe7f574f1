"""Typed parse errors raised by the folding and token stages.

WHY: Every stage of the pipeline is fail-fast. Callers (the file reader,
the CLI, tests) need to tell a broken line apart from a bad token or a
bad field value, and the message has to name where the problem is and
what was expected rather than leak a low-level parser message.

HOW: One small hierarchy rooted at RecordParseError (a ValueError, so
generic "bad input" handlers keep working). Each subclass stores the
structured details as attributes and builds a readable message.

RULES:
- MalformedLineError: tag / counter / terminator mismatch, fatal for the fold
- PayloadEncodingError: folded payload bytes are not valid UTF-8
- UnknownTokenError: a token slice matches no known key
- FieldFormatError: a matched key's value fails its leaf grammar
- Messages always carry an offset or the offending slice plus the
  expected grammar
"""

from __future__ import annotations


class RecordParseError(ValueError):
    """Base class for every error raised while parsing PDB records."""


class MalformedLineError(RecordParseError):
    """Raised when a physical line does not fit its record layout.

    Attributes:
        offset: Byte offset of the start of the offending line.
        expected: Short description of the grammar that was expected.
    """

    def __init__(self, offset: int, expected: str) -> None:
        self.offset = offset
        self.expected = expected
        super().__init__("Malformed line at byte {}: expected {}".format(offset, expected))


class MissingRecordError(MalformedLineError):
    """Raised when a required (one-or-more) fold matches no line at all."""

    def __init__(self, offset: int, tag: str) -> None:
        self.tag = tag
        super().__init__(offset, "at least one {} line".format(tag))


class PayloadEncodingError(RecordParseError):
    """Raised when the concatenated payload of a fold is not valid UTF-8.

    Attributes:
        offset: Input byte offset of the first byte that failed to decode.
        reason: The codec's description of the failure.
    """

    def __init__(self, offset: int, reason: str) -> None:
        self.offset = offset
        self.reason = reason
        super().__init__(
            "Payload is not valid UTF-8 at byte {}: {}".format(offset, reason)
        )


class UnknownTokenError(RecordParseError):
    """Raised when a token slice starts with no known ``KEY:`` literal.

    Attributes:
        slice_text: The trimmed token slice that could not be dispatched.
    """

    def __init__(self, slice_text: str) -> None:
        self.slice_text = slice_text
        super().__init__("Unknown token {!r}: expected KEY: value with a known key".format(slice_text))


class FieldFormatError(RecordParseError):
    """Raised when a field value does not match its leaf grammar.

    Attributes:
        key: The field key (``"CHAIN"``, ``"EC"``, ``"REVDAT date"``...).
        remainder: The unparsed remainder of the value.
        expected: Name of the leaf grammar that rejected it.
    """

    def __init__(self, key: str, remainder: str, expected: str) -> None:
        self.key = key
        self.remainder = remainder
        self.expected = expected
        super().__init__(
            "Bad value for {}: expected {}, could not parse {!r}".format(key, expected, remainder)
        )
