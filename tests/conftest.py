"""Shared test fixtures for the pdb_records test suite.

WHY: Several test modules need the same verified PDB record lines
(the hemoglobin COMPND example and a typical REVDAT history). Keeping
them here avoids copy-paste and keeps the column alignment in one place.

HOW: Module-level constants hold the exact fixed-column lines; pytest
fixtures hand them out as bytes, and one fixture writes a complete
header section to a temporary .pdb file.

RULES:
- Column positions follow PDB format v3.3 exactly
- COMPND payloads start at column 11, REVDAT payloads at column 13
- Every line ends with a newline terminator
"""

import pytest

COMPND_LINES = (
    "COMPND    MOL_ID:  1;\n"
    "COMPND   2 MOLECULE:  HEMOGLOBIN ALPHA CHAIN;\n"
    "COMPND   3 CHAIN: A,  C;\n"
    "COMPND  10 SYNONYM:  DEOXYHEMOGLOBIN BETA CHAIN;\n"
    "COMPND   4 EC:  3.2.1.14, 3.2.1.17;\n"
    "COMPND  11 ENGINEERED: YES;\n"
    "COMPND  12 MUTATION:  NO\n"
)

SOURCE_LINES = (
    "SOURCE    MOL_ID: 1;\n"
    "SOURCE   2 ORGANISM_SCIENTIFIC: HOMO SAPIENS;\n"
    "SOURCE   3 ORGANISM_COMMON: HUMAN;\n"
    "SOURCE   4 ORGANISM_TAXID: 9606;\n"
    "SOURCE   5 EXPRESSION_SYSTEM: ESCHERICHIA COLI;\n"
    "SOURCE   6 EXPRESSION_SYSTEM_TAXID: 562;\n"
    "SOURCE   7 EXPRESSION_SYSTEM_STRAIN: BL21(DE3)\n"
)

REVDAT_LINES = (
    "REVDAT   4   24-FEB-09 1ABC    1       VERSN\n"
    "REVDAT   3   01-APR-03 1ABC    1       JRNL\n"
    "REVDAT   2   14-JAN-03 1ABC    1       REMARK\n"
    "REVDAT   1   28-NOV-01 1ABC    0\n"
)

SAMPLE_PDB = (
    "HEADER    OXYGEN TRANSPORT                        07-MAR-84   1ABC\n"
    "TITLE     THE CRYSTAL STRUCTURE OF HUMAN DEOXYHAEMOGLOBIN AT 1.74 ANGSTROMS\n"
    "TITLE    2 RESOLUTION\n"
    + COMPND_LINES
    + SOURCE_LINES
    + "KEYWDS    OXYGEN TRANSPORT, HEME,\n"
    "KEYWDS   2 RESPIRATORY PROTEIN\n"
    "EXPDTA    X-RAY DIFFRACTION\n"
    + REVDAT_LINES
    + "REMARK   2\n"
    "REMARK   2 RESOLUTION.    1.74 ANGSTROMS.\n"
    "END\n"
)


def revdat_line(mod_num, rest, continuation=None):
    """Build one REVDAT line with modNum in columns 8-10 and the
    continuation in columns 11-12; ``rest`` starts at column 13."""
    cont = "" if continuation is None else str(continuation)
    return "REVDAT {:>3}{:>2}{}\n".format(mod_num, cont, rest)


@pytest.fixture
def compnd_bytes():
    """The verified seven-line COMPND example."""
    return COMPND_LINES.encode("ascii")


@pytest.fixture
def source_bytes():
    return SOURCE_LINES.encode("ascii")


@pytest.fixture
def revdat_bytes():
    """Four single-line REVDAT entries, newest first."""
    return REVDAT_LINES.encode("ascii")


@pytest.fixture
def sample_pdb_bytes():
    """A header section mixing supported and unsupported records."""
    return SAMPLE_PDB.encode("ascii")


@pytest.fixture
def sample_pdb_file(tmp_path):
    path = tmp_path / "1abc.pdb"
    path.write_bytes(SAMPLE_PDB.encode("ascii"))
    return path


@pytest.fixture
def make_revdat_line():
    return revdat_line
