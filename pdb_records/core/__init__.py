"""Core folding, token grammar and intermediate representation modules.

WHY: The core package holds the record-agnostic heart of the parser:
the IR dataclasses, the line classifier, the continuation and entry
folders, the leaf value grammars and the token dispatcher. Every record
parser is built from these pieces.

HOW: ir.py defines the data structures, lines.py classifies physical
lines, folding.py folds them into logical entries, primitives.py and
tokens.py parse the folded bodies, assembler.py builds typed records,
errors.py holds the exception hierarchy.

RULES:
- IR dataclasses are the contract, change with care
- Core modules know nothing about specific record tags except through
  LineLayout and the token table
"""
