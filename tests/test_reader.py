"""Tests for the file-level record reader."""

import pytest

from pdb_records import read_file, read_records
from pdb_records.core.errors import MalformedLineError
from pdb_records.core.ir import Compound, Keywords, RevisionHistory, Source, Title
from pdb_records.reader import build_parsers
from pdb_records.records.revision import RevisionParser


class TestReadRecords:

    def test_records_in_file_order(self, sample_pdb_bytes):
        parsed = read_records(sample_pdb_bytes, revdat_policy="sentinel")
        assert [type(r) for r in parsed.records] == [
            Title, Compound, Source, Keywords, RevisionHistory,
        ]

    def test_unhandled_lines_are_counted(self, sample_pdb_bytes):
        parsed = read_records(sample_pdb_bytes, revdat_policy="sentinel")
        assert parsed.skipped == {"HEADER": 1, "EXPDTA": 1, "REMARK": 2, "END": 1}

    def test_record_contents(self, sample_pdb_bytes):
        parsed = read_records(sample_pdb_bytes, revdat_policy="sentinel")
        title, compound, source, keywords, history = parsed.records
        assert title.text.endswith("1.74 ANGSTROMS RESOLUTION")
        assert len(compound.tokens) == 7
        assert len(source.tokens) == 7
        assert keywords.keywords == ("OXYGEN TRANSPORT", "HEME", "RESPIRATORY PROTEIN")
        assert [r.modification_number for r in history.revisions] == [4, 3, 2, 1]

    def test_str_input(self, sample_pdb_bytes):
        from_text = read_records(sample_pdb_bytes.decode("ascii"), revdat_policy="sentinel")
        from_bytes = read_records(sample_pdb_bytes, revdat_policy="sentinel")
        assert from_text.records == from_bytes.records

    def test_separate_runs_give_separate_records(self):
        data = (
            b"TITLE     FIRST\n"
            b"REMARK   1\n"
            b"TITLE     SECOND\n"
        )
        parsed = read_records(data)
        assert [r.text for r in parsed.by_tag("TITLE")] == ["FIRST", "SECOND"]

    def test_empty_input(self):
        parsed = read_records(b"")
        assert parsed.records == []
        assert not parsed.skipped

    def test_unterminated_foreign_line_is_skipped(self):
        parsed = read_records(b"TITLE     ONLY\nEND")
        assert parsed.skipped == {"END": 1}

    def test_parse_errors_propagate(self):
        with pytest.raises(MalformedLineError):
            read_records(b"COMPND    MOL_ID: 1;\nCOMPND  x2 CHAIN: A;\n")

    def test_strict_policy_is_passed_through(self, monkeypatch):
        monkeypatch.delenv("PDB_RECORDS_REVDAT_POLICY", raising=False)
        parsers = build_parsers("strict")
        revision_parsers = [p for p in parsers if isinstance(p, RevisionParser)]
        assert [p.policy for p in revision_parsers] == ["strict"]


class TestReadFile:

    def test_source_name_is_file_name(self, sample_pdb_file):
        parsed = read_file(sample_pdb_file, revdat_policy="sentinel")
        assert parsed.source_name == "1abc.pdb"
        assert len(parsed.records) == 5

    def test_accepts_str_path(self, sample_pdb_file):
        parsed = read_file(str(sample_pdb_file), revdat_policy="sentinel")
        assert len(parsed.records) == 5
