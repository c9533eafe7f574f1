"""Tests for the JSON and plain text export formatters.

WHY: Formatters are the contract with everything downstream of the
parser. The JSON export must always satisfy the bundled schema, and
failed REVDAT entries must stay visible in both formats.

HOW: Each test parses the shared sample file (optionally with a broken
REVDAT entry appended) and inspects the formatter output.

RULES:
- JSON output is re-validated here with jsonschema, independent of the
  formatter's own check
"""

import dataclasses
import json

import jsonschema
import pytest

from pdb_records import read_records
from pdb_records.core.ir import ParsedFile
from pdb_records.formatters import FORMATTERS
from pdb_records.formatters.base import BaseFormatter, FormatterOutput
from pdb_records.formatters.json_records import JsonRecordsFormatter, _get_schema, record_to_dict
from pdb_records.formatters.plain_text import PlainTextFormatter


@pytest.fixture
def parsed(sample_pdb_bytes):
    return read_records(sample_pdb_bytes, revdat_policy="sentinel", source_name="1abc.pdb")


@pytest.fixture
def parsed_with_failure(sample_pdb_bytes, make_revdat_line):
    broken = make_revdat_line(5, " 31-FEB-10 1ABC    1       JRNL").encode("ascii")
    # Prepend the broken entry so it joins the existing REVDAT run.
    data = sample_pdb_bytes.replace(b"REVDAT   4", broken + b"REVDAT   4", 1)
    return read_records(data, revdat_policy="sentinel", source_name="1abc.pdb")


class TestRegistry:

    def test_keys(self):
        assert set(FORMATTERS) == {"json", "plain_text"}

    def test_output_carries_suffix_and_content_only(self):
        assert [f.name for f in dataclasses.fields(FormatterOutput)] == ["suffix", "content"]

    def test_values_are_formatter_classes(self):
        for cls in FORMATTERS.values():
            assert issubclass(cls, BaseFormatter)
            assert cls().name


class TestJsonRecordsFormatter:

    def test_single_output(self, parsed):
        outputs = JsonRecordsFormatter().format(parsed)
        assert len(outputs) == 1
        assert outputs[0].suffix == "-records.json"

    def test_output_matches_schema(self, parsed):
        document = json.loads(JsonRecordsFormatter().format(parsed)[0].content)
        jsonschema.validate(instance=document, schema=_get_schema())
        assert document["source"] == "1abc.pdb"
        assert document["skipped"] == {"HEADER": 1, "EXPDTA": 1, "REMARK": 2, "END": 1}

    def test_record_types_in_order(self, parsed):
        document = json.loads(JsonRecordsFormatter().format(parsed)[0].content)
        assert [r["type"] for r in document["records"]] == [
            "TITLE", "COMPND", "SOURCE", "KEYWDS", "REVDAT",
        ]

    def test_token_values(self, parsed):
        document = json.loads(JsonRecordsFormatter().format(parsed)[0].content)
        compound = document["records"][1]
        assert compound["tokens"][0] == {"key": "MOL_ID", "value": 1}
        assert compound["tokens"][2] == {"key": "CHAIN", "value": ["A", "C"]}
        assert compound["tokens"][5] == {"key": "ENGINEERED", "value": True}

    def test_revision_values(self, parsed):
        document = json.loads(JsonRecordsFormatter().format(parsed)[0].content)
        newest = document["records"][4]["revisions"][0]
        assert newest == {
            "ok": True,
            "entry_key": 4,
            "modification_number": 4,
            "modification_date": "2009-02-24",
            "idcode": "1ABC",
            "modification_type": "OTHER_MODIFICATION",
            "modification_detail": ["VERSN"],
            "error": None,
        }

    def test_failed_entry_is_sentinel_with_error(self, parsed_with_failure):
        document = json.loads(JsonRecordsFormatter().format(parsed_with_failure)[0].content)
        revisions = document["records"][4]["revisions"]
        assert len(revisions) == 5
        failed = revisions[0]
        assert failed["ok"] is False
        assert failed["entry_key"] == 5
        assert failed["modification_number"] == 0
        assert failed["modification_date"] == "0001-01-01"
        assert failed["modification_type"] == "INITIAL_RELEASE"
        assert "calendar" in failed["error"]

    def test_empty_file(self):
        document = json.loads(JsonRecordsFormatter().format(ParsedFile())[0].content)
        assert document == {"source": "", "records": [], "skipped": {}}

    def test_unknown_record_type(self):
        with pytest.raises(TypeError):
            record_to_dict(object())


class TestPlainTextFormatter:

    def test_single_output(self, parsed):
        outputs = PlainTextFormatter().format(parsed)
        assert len(outputs) == 1
        assert outputs[0].suffix == "-records.txt"

    def test_blocks(self, parsed):
        content = PlainTextFormatter().format(parsed)[0].content
        blocks = content.rstrip("\n").split("\n\n")
        assert [b.splitlines()[0] for b in blocks] == [
            "TITLE:", "COMPND:", "SOURCE:", "KEYWDS:", "REVDAT:",
        ]

    def test_token_line(self, parsed):
        content = PlainTextFormatter().format(parsed)[0].content
        assert (
            "  MOL_ID=1; MOLECULE=HEMOGLOBIN ALPHA CHAIN; CHAIN=A, C; "
            "SYNONYM=DEOXYHEMOGLOBIN BETA CHAIN; EC=3.2.1.14, 3.2.1.17; "
            "ENGINEERED=YES; MUTATION=NO"
        ) in content.splitlines()

    def test_revision_lines(self, parsed):
        lines = PlainTextFormatter().format(parsed)[0].content.splitlines()
        assert "    4  2009-02-24  1ABC  OTHER_MODIFICATION  VERSN" in lines
        assert "    1  2001-11-28  1ABC  INITIAL_RELEASE" in lines

    def test_failed_entry_marked(self, parsed_with_failure):
        lines = PlainTextFormatter().format(parsed_with_failure)[0].content.splitlines()
        assert "    5  (unparsed) 31-FEB-10 1ABC 1 JRNL" in lines

    def test_no_trailing_whitespace(self, parsed):
        content = PlainTextFormatter().format(parsed)[0].content
        assert all(line == line.rstrip() for line in content.splitlines())
        assert content.endswith("\n")

    def test_empty_file(self):
        assert PlainTextFormatter().format(ParsedFile())[0].content == ""
