"""pdb-records: continuation-record parser for the PDB text format.

WHY: PDB header records such as COMPND, SOURCE and REVDAT spread one
logical record over many fixed-column lines. Before any field grammar
can run, the physical lines must be folded back into logical bodies, and
the COMPND/SOURCE bodies must be split into typed key/value tokens.

HOW: Five-stage pipeline: classify lines (core.lines), fold
continuations and group entries (core.folding), tokenize bodies
(core.tokens with core.primitives), assemble typed records
(core.assembler). Record parsers (records/) wire the stages per record
type; reader.py dispatches a whole file by record tag; formatters/
export the result.

RULES:
- Every stage is a pure function of its input; no shared state
- All failures are typed RecordParseError subclasses, raised fail-fast
- The only tolerated failure is a REVDAT entry under the sentinel policy
"""

from pdb_records.reader import read_file, read_records

__version__ = "0.1.0"

__all__ = ["read_file", "read_records", "__version__"]
