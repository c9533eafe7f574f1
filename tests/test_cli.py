"""Tests for the pdb-records command-line interface.

WHY: The CLI is the main user entry point. It must write one file per
formatter next to the input (or into --output-dir), never overwrite an
earlier export, and turn parse errors into a clean exit status.

HOW: main() is called with an explicit argv list; files go to tmp_path.
"""

import json

import pytest

from pdb_records.cli import _resolve_output_path, build_parser, main
from pdb_records.config import load_log_level


class TestMain:

    def test_writes_every_format(self, sample_pdb_file, capsys):
        main([str(sample_pdb_file), "--revdat-policy", "sentinel"])
        out_dir = sample_pdb_file.parent
        assert (out_dir / "1abc-records.json").is_file()
        assert (out_dir / "1abc-records.txt").is_file()
        err = capsys.readouterr().err
        assert "Parsed 5 record(s), skipped 5 other line(s)" in err
        assert "Done! Saved 2 file(s)" in err

    def test_single_format_to_output_dir(self, sample_pdb_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(sample_pdb_file), "--formats", "json", "--output-dir", str(out_dir)])
        written = sorted(p.name for p in out_dir.iterdir())
        assert written == ["1abc-records.json"]
        document = json.loads((out_dir / "1abc-records.json").read_text(encoding="utf-8"))
        assert document["source"] == "1abc.pdb"

    def test_second_run_does_not_overwrite(self, sample_pdb_file):
        main([str(sample_pdb_file), "--formats", "plain_text"])
        main([str(sample_pdb_file), "--formats", "plain_text"])
        assert (sample_pdb_file.parent / "1abc-records-2.txt").is_file()

    def test_unknown_format(self, sample_pdb_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_pdb_file), "--formats", "xml"])
        assert exc_info.value.code == 1
        assert "Unknown format 'xml'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.pdb")])
        assert exc_info.value.code == 1

    def test_strict_policy_fails_on_bad_entry(self, tmp_path, make_revdat_line, capsys):
        path = tmp_path / "bad.pdb"
        path.write_text(make_revdat_line(1, " 28-NOV-01 1ABC    9"), encoding="ascii")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "--revdat-policy", "strict"])
        assert exc_info.value.code == 1
        assert "Error: Bad value for REVDAT modType" in capsys.readouterr().err

    def test_sentinel_policy_warns(self, tmp_path, make_revdat_line, capsys):
        path = tmp_path / "bad.pdb"
        path.write_text(make_revdat_line(1, " 28-NOV-01 1ABC    9"), encoding="ascii")
        main([str(path), "--revdat-policy", "sentinel", "--formats", "json"])
        assert "1 REVDAT entry could not be parsed" in capsys.readouterr().err

    def test_bad_environment_policy(self, sample_pdb_file, monkeypatch):
        monkeypatch.setenv("PDB_RECORDS_REVDAT_POLICY", "ignore")
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_pdb_file)])
        assert exc_info.value.code == 1


class TestBuildParser:

    def test_log_level_is_case_insensitive(self):
        args = build_parser().parse_args(["x.pdb", "--log-level", "debug"])
        assert args.log_level == "DEBUG"

    def test_rejects_unknown_policy(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["x.pdb", "--revdat-policy", "lenient"])


class TestResolveOutputPath:

    def test_no_conflict(self, tmp_path):
        assert _resolve_output_path("1abc", "-records.json", tmp_path) == tmp_path / "1abc-records.json"

    def test_counter_increments(self, tmp_path):
        (tmp_path / "1abc-records.json").write_text("{}")
        (tmp_path / "1abc-records-2.json").write_text("{}")
        assert _resolve_output_path("1abc", "-records.json", tmp_path) == tmp_path / "1abc-records-3.json"

    def test_suffix_without_extension(self, tmp_path):
        (tmp_path / "1abc-records").write_text("")
        assert _resolve_output_path("1abc", "-records", tmp_path) == tmp_path / "1abc-records-2"


class TestLogLevel:

    def test_bad_environment_log_level(self, sample_pdb_file, monkeypatch, capsys):
        monkeypatch.setenv("PDB_RECORDS_LOG_LEVEL", "verbose")
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_pdb_file)])
        assert exc_info.value.code == 1
        assert "Error: Unknown log level 'VERBOSE'" in capsys.readouterr().err

    def test_flag_overrides_bad_environment(self, sample_pdb_file, monkeypatch):
        monkeypatch.setenv("PDB_RECORDS_LOG_LEVEL", "verbose")
        main([str(sample_pdb_file), "--log-level", "info", "--formats", "json"])
        assert (sample_pdb_file.parent / "1abc-records.json").is_file()

    def test_load_log_level_default(self, monkeypatch):
        monkeypatch.delenv("PDB_RECORDS_LOG_LEVEL", raising=False)
        assert load_log_level() == "WARNING"

    def test_load_log_level_is_normalised(self, monkeypatch):
        monkeypatch.setenv("PDB_RECORDS_LOG_LEVEL", " debug ")
        assert load_log_level() == "DEBUG"

    def test_load_log_level_rejects_unknown(self, monkeypatch):
        monkeypatch.setenv("PDB_RECORDS_LOG_LEVEL", "TRACE")
        with pytest.raises(ValueError, match="PDB_RECORDS_LOG_LEVEL"):
            load_log_level()
