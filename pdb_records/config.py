"""Format constants, record layouts, and .env-driven settings.

WHY: Column layouts, record names and the token delimiter are format
constants that several modules share. A couple of behaviours (log level,
REVDAT failure policy) are worth overriding per environment without
touching code. Keeping both in one place makes them easy to find.

HOW: python-dotenv loads the .env file on import. Layouts are module-level
LineLayout constants, one per record tag. Environment-driven settings are
read with os.getenv and validated by small loader functions.

RULES:
- Layout slices are 0-based; the PDB v3.3 column numbers are in comments
- Layouts and the delimiter are constants, not runtime configuration
- PDB_RECORDS_LOG_LEVEL is DEBUG, INFO, WARNING (default) or ERROR
- PDB_RECORDS_REVDAT_POLICY is "sentinel" (default) or "strict"
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from pdb_records.core.lines import LineLayout

load_dotenv()

# ---------------------------------------------------------------------------
# Record layouts (PDB format v3.3)
# ---------------------------------------------------------------------------

# COMPND: 1-6 record name, 8-10 continuation, 11-80 specification list
COMPND_LAYOUT = LineLayout(tag="COMPND", continuation=slice(7, 10), payload_start=10)

# SOURCE: 1-6 record name, 8-10 continuation, 11-79 specification list
SOURCE_LAYOUT = LineLayout(tag="SOURCE", continuation=slice(7, 10), payload_start=10)

# TITLE: 1-6 record name, 9-10 continuation, 11-80 title text
TITLE_LAYOUT = LineLayout(tag="TITLE", continuation=slice(8, 10), payload_start=10)

# KEYWDS: 1-6 record name, 9-10 continuation, 11-79 keyword list
KEYWDS_LAYOUT = LineLayout(tag="KEYWDS", continuation=slice(8, 10), payload_start=10)

# REVDAT: 1-6 record name, 8-10 modification number (entry key),
# 11-12 continuation, 14-66 date, id code, type and record names
REVDAT_LAYOUT = LineLayout(
    tag="REVDAT",
    continuation=slice(10, 12),
    payload_start=12,
    entry_key=slice(7, 10),
)

TOKEN_DELIMITER = ";"
"""Separates key/value tokens in COMPND and SOURCE bodies."""

KEY_TERMINATOR = ":"
"""Immediately follows a token key, e.g. ``MOL_ID:``."""

# ---------------------------------------------------------------------------
# Environment-driven settings
# ---------------------------------------------------------------------------

REVDAT_POLICIES = ("sentinel", "strict")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def load_log_level() -> str:
    """Return the log level from PDB_RECORDS_LOG_LEVEL, default WARNING.

    Raises ValueError for a name outside LOG_LEVELS.
    """
    level = os.getenv("PDB_RECORDS_LOG_LEVEL", "WARNING").strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(
            "Unknown log level {!r} in PDB_RECORDS_LOG_LEVEL. "
            "Use one of: {}.".format(level, ", ".join(LOG_LEVELS))
        )
    return level


def load_revdat_policy() -> str:
    """Return the REVDAT entry failure policy from the environment.

    RULES:
    - Reads PDB_RECORDS_REVDAT_POLICY, default "sentinel"
    - Raises ValueError for anything other than "sentinel" or "strict"
    """
    policy = os.getenv("PDB_RECORDS_REVDAT_POLICY", "sentinel").strip().lower()
    if policy not in REVDAT_POLICIES:
        raise ValueError(
            "Unknown REVDAT policy {!r} in PDB_RECORDS_REVDAT_POLICY. "
            "Use one of: {}.".format(policy, ", ".join(REVDAT_POLICIES))
        )
    return policy
