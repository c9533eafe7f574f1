"""Token grammar for COMPND and SOURCE specification lists.

WHY: A folded COMPND or SOURCE body is a semicolon-delimited list of
``KEY: value`` pairs drawn from a closed set of 41 keys. Each key has
its own value shape (integer, word, list, flag). Writing one parser per
key would mean 41 near-identical functions; a table keeps them in one
place and makes the priority order explicit.

HOW: TOKEN_RULES is an ordered table of (key literal, leaf parser, token
kind). split_token_slices() cuts the body on ";" and trims each slice.
parse_token() walks the table and lets the first rule whose ``KEY:``
literal prefixes the slice parse the rest of it. parse_tokens() does
both for a whole body.

RULES:
- Key match is an exact literal immediately followed by ":"
- First match wins; the table order is the dispatch priority
- Empty slices (e.g. after a trailing ";") are dropped
- A slice matching no key raises UnknownTokenError
- A matched key whose value fails its leaf grammar raises FieldFormatError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from pdb_records.config import KEY_TERMINATOR, TOKEN_DELIMITER
from pdb_records.core.errors import UnknownTokenError
from pdb_records.core.ir import Token, TokenKind, TokenValue
from pdb_records.core.primitives import (
    parse_ec_list,
    parse_integer,
    parse_integer_list,
    parse_phrase,
    parse_word,
    parse_word_list,
    parse_yes_no,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenRule:
    """One row of the dispatch table."""

    kind: TokenKind
    parse: Callable[[str, str], TokenValue]

    @property
    def key(self) -> str:
        return self.kind.value

    @property
    def prefix(self) -> str:
        return self.kind.value + KEY_TERMINATOR


_K = TokenKind

TOKEN_RULES: Tuple[TokenRule, ...] = (
    TokenRule(_K.MOLECULE, parse_phrase),
    TokenRule(_K.MOL_ID, parse_integer),
    TokenRule(_K.CHAIN, parse_word_list),
    TokenRule(_K.FRAGMENT, parse_word),
    TokenRule(_K.SYNONYM, parse_word_list),
    TokenRule(_K.EC, parse_ec_list),
    TokenRule(_K.ENGINEERED, parse_yes_no),
    TokenRule(_K.MUTATION, parse_yes_no),
    TokenRule(_K.OTHER_DETAILS, parse_phrase),
    TokenRule(_K.SYNTHETIC, parse_word),
    TokenRule(_K.ORGANISM_SCIENTIFIC, parse_word),
    TokenRule(_K.ORGANISM_COMMON, parse_word_list),
    TokenRule(_K.ORGANISM_TAXID, parse_integer_list),
    TokenRule(_K.STRAIN, parse_phrase),
    TokenRule(_K.VARIANT, parse_word),
    TokenRule(_K.CELL_LINE, parse_word),
    TokenRule(_K.ATCC, parse_integer),
    TokenRule(_K.ORGAN, parse_word),
    TokenRule(_K.TISSUE, parse_word),
    TokenRule(_K.CELL, parse_word),
    TokenRule(_K.ORGANELLE, parse_word),
    TokenRule(_K.SECRETION, parse_word),
    TokenRule(_K.CELLULAR_LOCATION, parse_word),
    TokenRule(_K.PLASMID, parse_word),
    TokenRule(_K.GENE, parse_word_list),
    TokenRule(_K.EXPRESSION_SYSTEM, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_COMMON, parse_word_list),
    TokenRule(_K.EXPRESSION_SYSTEM_TAXID, parse_integer_list),
    TokenRule(_K.EXPRESSION_SYSTEM_STRAIN, parse_phrase),
    TokenRule(_K.EXPRESSION_SYSTEM_VARIANT, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_CELL_LINE, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_ATCC_NUMBER, parse_integer),
    TokenRule(_K.EXPRESSION_SYSTEM_ORGAN, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_TISSUE, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_CELL, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_ORGANELLE, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_CELLULAR_LOCATION, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_VECTOR_TYPE, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_VECTOR, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_PLASMID, parse_word),
    TokenRule(_K.EXPRESSION_SYSTEM_GENE, parse_word_list),
)


def split_token_slices(body: str) -> List[str]:
    """Split a folded body into trimmed, non-empty token slices."""
    slices = (piece.strip() for piece in body.split(TOKEN_DELIMITER))
    return [piece for piece in slices if piece]


def parse_token(slice_text: str, rules: Tuple[TokenRule, ...] = TOKEN_RULES) -> Token:
    """Dispatch one token slice to the first rule whose key prefixes it.

    Raises:
        UnknownTokenError: No rule's ``KEY:`` literal prefixes the slice.
        FieldFormatError: The matched rule's leaf grammar rejects the value.
    """
    for rule in rules:
        if slice_text.startswith(rule.prefix):
            value = rule.parse(slice_text[len(rule.prefix):], rule.key)
            return Token(kind=rule.kind, value=value)
    raise UnknownTokenError(slice_text)


def parse_tokens(body: str, rules: Tuple[TokenRule, ...] = TOKEN_RULES) -> List[Token]:
    """Split a folded body and parse every slice into a Token, in order."""
    tokens = [parse_token(piece, rules) for piece in split_token_slices(body)]
    logger.debug("Parsed %d token(s)", len(tokens))
    return tokens
