"""
Tests for glyphguard.cli: command-line interface subcommands.

Tests use SystemExit assertions since the CLI calls sys.exit().
"""

import io
import json

import pytest

from glyphguard import clean
from glyphguard.cli import _build_parser, main
from tests.conftest import OBFUSCATED_SAMPLE, ZWSP, make_simple_docx, make_text_file


def run_cli(argv):
    """Run main() and return its exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


# ===================================================================
# Parser construction
# ===================================================================

class TestBuildParser:
    """Tests for the argument parser structure."""

    def test_parser_has_subcommands(self):
        parser = _build_parser()
        for command in ("scan", "clean", "inspect"):
            args = parser.parse_args([command, "file.txt"])
            assert args.command == command

    def test_scan_requires_input(self):
        parser = _build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["scan"])

    def test_inspect_limit_is_an_int(self):
        args = _build_parser().parse_args(["inspect", "file.txt", "--limit", "3"])
        assert args.limit == 3

    def test_verbose_flag(self):
        args = _build_parser().parse_args(["--verbose", "scan", "file.txt"])
        assert args.verbose is True

    def test_no_subcommand_prints_help(self, capsys):
        """Calling main() with no arguments prints help and exits 0."""
        assert run_cli([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_version(self, capsys):
        assert run_cli(["--version"]) == 0
        assert "0.1.0" in capsys.readouterr().out


# ===================================================================
# Scan subcommand
# ===================================================================

class TestScanSubcommand:
    """Tests for the 'scan' subcommand via main()."""

    def test_scan_clean_file(self, clean_file, capsys):
        assert run_cli(["scan", str(clean_file)]) == 0
        out = capsys.readouterr().out
        assert "No suspicious characters found." in out
        assert "Clean or minimal obfuscation" in out

    def test_scan_reports_findings(self, obfuscated_file, capsys):
        assert run_cli(["scan", str(obfuscated_file)]) == 0
        out = capsys.readouterr().out
        assert "Findings" in out
        assert "CRITICAL" in out
        assert "High suspicion of watermarking or obfuscation" in out

    def test_fail_on_issues(self, obfuscated_file):
        assert run_cli(["scan", str(obfuscated_file), "--fail-on-issues"]) == 2

    def test_fail_on_issues_clean_input(self, clean_file):
        assert run_cli(["scan", str(clean_file), "--fail-on-issues"]) == 0

    def test_json_output(self, obfuscated_file, capsys):
        assert run_cli(["scan", str(obfuscated_file), "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["unmatched_bidi"] == 1
        assert payload["zero_width_chars"] == 1
        assert payload["total_issues"] == sum(
            value for key, value in payload.items()
            if isinstance(value, int) and key != "total_issues"
        )

    def test_scan_docx(self, tmp_path, capsys):
        path = make_simple_docx(tmp_path / "in.docx", [f"water{ZWSP}marked"])
        assert run_cli(["scan", str(path), "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["zero_width_chars"] == 1

    def test_scan_stdin(self, monkeypatch, capsys):
        data = f"a{ZWSP}b".encode("utf-8")
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))
        assert run_cli(["scan", "-", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["zero_width_chars"] == 1

    def test_scan_nonexistent_file_exits_1(self, tmp_path, capsys):
        assert run_cli(["scan", str(tmp_path / "missing.txt")]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_scan_legacy_doc_exits_1(self, tmp_path, capsys):
        fake = tmp_path / "old.doc"
        fake.write_bytes(b"fake content")
        assert run_cli(["scan", str(fake)]) == 1
        assert "Legacy .doc" in capsys.readouterr().out


# ===================================================================
# Clean subcommand
# ===================================================================

class TestCleanSubcommand:
    """Tests for the 'clean' subcommand via main()."""

    def test_clean_to_stdout(self, obfuscated_file, capsys):
        assert run_cli(["clean", str(obfuscated_file)]) == 0
        assert capsys.readouterr().out == clean(OBFUSCATED_SAMPLE) + "\n"

    def test_clean_to_file(self, obfuscated_file, tmp_path, capsys):
        output_path = tmp_path / "out" / "cleaned.txt"
        assert run_cli(["clean", str(obfuscated_file), "--output", str(output_path)]) == 0
        assert output_path.read_text(encoding="utf-8") == clean(OBFUSCATED_SAMPLE)
        out = capsys.readouterr().out
        assert "Cleaning Summary" in out
        assert "zero width removed" in out
        assert str(output_path.resolve()) in out

    def test_clean_already_clean(self, clean_file, tmp_path, capsys):
        output_path = tmp_path / "cleaned.txt"
        assert run_cli(["clean", str(clean_file), "--output", str(output_path)]) == 0
        assert "Text was already clean." in capsys.readouterr().out

    def test_clean_keeps_undecodable_bytes(self, tmp_path):
        source = tmp_path / "binary.txt"
        source.write_bytes(b"ab\xff\xe2\x80\x8bcd")
        output_path = tmp_path / "cleaned.txt"
        assert run_cli(["clean", str(source), "--output", str(output_path)]) == 0
        assert output_path.read_bytes() == b"ab\xffcd"

    def test_clean_nonexistent_file_exits_1(self, tmp_path):
        assert run_cli(["clean", str(tmp_path / "missing.txt")]) == 1


# ===================================================================
# Inspect subcommand
# ===================================================================

class TestInspectSubcommand:
    """Tests for the 'inspect' subcommand via main()."""

    def test_inspect_names_characters(self, obfuscated_file, capsys):
        assert run_cli(["inspect", str(obfuscated_file)]) == 0
        out = capsys.readouterr().out
        assert "U+200B Zero-Width Space" in out
        assert "U+0430 Cyrillic Small Letter A" in out
        assert "U+202A Left-to-Right Embedding" in out

    def test_inspect_limit(self, obfuscated_file, capsys):
        assert run_cli(["inspect", str(obfuscated_file), "--limit", "1"]) == 0
        out = capsys.readouterr().out
        assert "U+200B" in out
        assert "U+0430" not in out
        assert "more flagged character(s)" in out

    def test_inspect_clean_file(self, clean_file, capsys):
        assert run_cli(["inspect", str(clean_file)]) == 0
        assert "No flagged characters." in capsys.readouterr().out

    def test_inspect_lists_control_chars(self, tmp_path, capsys):
        path = make_text_file(tmp_path / "tab.txt", "a\tb")
        assert run_cli(["inspect", str(path)]) == 0
        assert "U+0009 <Cc>" in capsys.readouterr().out
