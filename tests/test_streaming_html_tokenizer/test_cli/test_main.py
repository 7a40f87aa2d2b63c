"""Tests for the html-tokenize command-line tool."""

import csv
import io
import json
import logging

import pytest

from streaming_html_tokenizer import __version__
from streaming_html_tokenizer.cli.main import (
    format_results,
    format_token,
    main,
)
from streaming_html_tokenizer.shared.logging import PACKAGE_LOGGER
from streaming_html_tokenizer.tokenization.benchmarks import TokenizationBenchmark


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers installed by main()."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def good_file(tmp_path):
    path = tmp_path / "good.html"
    path.write_text("<p class=x>hi</p>", encoding="utf-8")
    return path


@pytest.fixture
def bad_file(tmp_path):
    path = tmp_path / "bad.html"
    path.write_text("<p>\n<>", encoding="utf-8")
    return path


class TestArguments:
    """Tests for argument handling."""

    def test_no_command_prints_help(self, capsys):
        """Test running without a command."""
        assert main([]) == 1
        assert "usage: html-tokenize" in capsys.readouterr().out

    def test_version(self, capsys):
        """Test --version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_type_rejected(self, good_file):
        """Test --types only accepts token type names."""
        with pytest.raises(SystemExit):
            main(["tokenize", str(good_file), "--types", "CDATA"])


class TestTokenizeCommand:
    """Tests for the tokenize command."""

    def test_json_output(self, good_file, capsys):
        """Test the default JSON output."""
        assert main(["tokenize", str(good_file)]) == 0
        records = json.loads(capsys.readouterr().out)
        assert len(records) == 1
        record = records[0]
        assert record["success"] is True
        assert record["error"] is None
        assert record["tokens"] == [
            {"type": "START_TAG", "value": "p", "attributes": [["class", "x"]],
             "self_closing": False},
            {"type": "TEXT", "value": "hi"},
            {"type": "END_TAG", "value": "p"},
        ]
        assert record["summary"]["token_count"] == 3

    def test_malformed_file_fails(self, bad_file, capsys):
        """Test a malformed file yields exit code 1 and its error."""
        assert main(["tokenize", str(bad_file)]) == 1
        record = json.loads(capsys.readouterr().out)[0]
        assert record["success"] is False
        assert record["error"] == "Invalid HTML tag at line 2, column 2"
        assert record["tokens"] == [
            {"type": "START_TAG", "value": "p", "attributes": [], "self_closing": False}
        ]

    def test_missing_file(self, tmp_path, capsys):
        """Test unreadable input is reported per file."""
        assert main(["-q", "tokenize", str(tmp_path / "nope.html")]) == 1
        record = json.loads(capsys.readouterr().out)[0]
        assert record["success"] is False
        assert record["tokens"] == []

    def test_text_format(self, good_file, capsys):
        """Test the human readable format."""
        assert main(["tokenize", str(good_file), "--format", "text"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == f"== {good_file} (ok)"
        assert lines[1:] == ["  START_TAG p class='x'", "  TEXT 'hi'", "  END_TAG 'p'"]

    def test_csv_format(self, good_file, capsys):
        """Test the CSV format."""
        assert main(["tokenize", str(good_file), "-f", "csv"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "file,index,type,value"
        assert lines[2] == f"{good_file},1,TEXT,hi"

    def test_type_filter(self, good_file, capsys):
        """Test --types keeps only the given kinds."""
        assert main(["tokenize", str(good_file), "--types", "TEXT"]) == 0
        record = json.loads(capsys.readouterr().out)[0]
        assert record["tokens"] == [{"type": "TEXT", "value": "hi"}]

    def test_max_tokens(self, good_file, capsys):
        """Test --max-tokens truncates the output."""
        assert main(["tokenize", str(good_file), "--max-tokens", "1"]) == 0
        record = json.loads(capsys.readouterr().out)[0]
        assert len(record["tokens"]) == 1
        assert record["summary"]["truncated"] is True

    def test_invalid_max_tokens(self, good_file, capsys):
        """Test a non-positive --max-tokens is a configuration error."""
        assert main(["tokenize", str(good_file), "--max-tokens", "0"]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_config_file(self, good_file, tmp_path, capsys):
        """Test options loaded from a configuration file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"filtering": {"mode": "EXCLUDE", "token_types": ["TEXT"]}}),
            encoding="utf-8"
        )
        assert main(["tokenize", str(good_file), "--config", str(config_path)]) == 0
        record = json.loads(capsys.readouterr().out)[0]
        assert [token["type"] for token in record["tokens"]] == ["START_TAG", "END_TAG"]

    def test_invalid_config_file(self, good_file, tmp_path, capsys):
        """Test a broken configuration file exits with code 2."""
        config_path = tmp_path / "config.json"
        config_path.write_text("{broken", encoding="utf-8")
        assert main(["tokenize", str(good_file), "-c", str(config_path)]) == 2

    def test_output_file(self, good_file, tmp_path, capsys):
        """Test writing results to a file."""
        output = tmp_path / "out.json"
        assert main(["tokenize", str(good_file), "-o", str(output)]) == 0
        assert capsys.readouterr().out == ""
        assert json.loads(output.read_text(encoding="utf-8"))[0]["success"] is True

    def test_stdin(self, monkeypatch, capsys):
        """Test '-' reads the document from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("<!-- c -->"))
        assert main(["tokenize", "-"]) == 0
        record = json.loads(capsys.readouterr().out)[0]
        assert record["file"] == "-"
        assert record["tokens"] == [{"type": "COMMENT", "value": " c "}]


class TestValidateCommand:
    """Tests for the validate command."""

    def test_text_output(self, good_file, bad_file, capsys):
        """Test the validation summary."""
        assert main(["validate", str(good_file), str(bad_file)]) == 1
        output = capsys.readouterr().out
        assert "Validated 2 files, 1 valid" in output
        assert f"✓ {good_file}" in output
        assert f"✗ {bad_file}" in output
        assert "Error: Invalid HTML tag at line 2, column 2" in output

    def test_json_output(self, bad_file, capsys):
        """Test JSON validation records carry the error location."""
        assert main(["validate", str(bad_file), "--format", "json"]) == 1
        record = json.loads(capsys.readouterr().out)[0]
        assert record["valid"] is False
        assert record["token_count"] == 1
        assert (record["line"], record["column"]) == (2, 2)

    def test_all_valid(self, good_file, capsys):
        """Test exit code 0 when every file is valid."""
        assert main(["validate", str(good_file)]) == 0

    def test_missing_file(self, tmp_path, capsys):
        """Test unreadable files are invalid."""
        assert main(["validate", str(tmp_path / "nope.html"), "-f", "json"]) == 1
        record = json.loads(capsys.readouterr().out)[0]
        assert record["valid"] is False
        assert record["error"]


class TestBenchmarkCommand:
    """Tests for the benchmark command."""

    @pytest.fixture(autouse=True)
    def tiny_cases(self, monkeypatch):
        monkeypatch.setattr(
            TokenizationBenchmark,
            "_create_test_cases",
            lambda self: {"tiny": "<p>x</p>"}
        )

    def test_benchmark(self, capsys):
        """Test the benchmark report includes the speed comparison."""
        assert main(["benchmark", "-n", "1"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["test_cases"] == ["tiny"]
        assert "relative_speed" in report

    def test_benchmark_no_compare(self, capsys):
        """Test --no-compare runs only the tokenizer."""
        assert main(["benchmark", "-n", "1", "--no-compare"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["parsers"] == ["streaming_html_tokenizer"]
        assert "relative_speed" not in report

    def test_invalid_iterations(self, capsys):
        """Test a non-positive iteration count."""
        assert main(["benchmark", "-n", "0"]) == 2


class TestFormatting:
    """Tests for output helpers."""

    def test_format_token_self_closing(self):
        """Test self-closing tags are marked."""
        token = {"type": "START_TAG", "value": "br", "attributes": [], "self_closing": True}
        assert format_token(token) == "START_TAG br /"

    def test_format_results_failed(self):
        """Test failed records show their error in text output."""
        records = [{"file": "x.html", "success": False, "error": "boom", "tokens": []}]
        assert format_results(records, "text") == "== x.html (FAILED)\n  error: boom"

    def test_csv_escapes_quotes(self):
        """Test double quotes are doubled in CSV values."""
        records = [{"file": "f", "success": True, "error": None,
                    "tokens": [{"type": "TEXT", "value": 'say "hi"'}]}]
        assert format_results(records, "csv").splitlines()[1] == 'f,0,TEXT,"say ""hi"""'

    def test_csv_quotes_file_names_and_multiline_values(self):
        """Test CSV rows stay parseable with commas and newlines in fields."""
        records = [{"file": "a,b.html", "success": True, "error": None,
                    "tokens": [{"type": "TEXT", "value": "x"},
                               {"type": "TEXT", "value": "one,\ntwo"}]}]
        rows = list(csv.reader(io.StringIO(format_results(records, "csv"))))
        assert rows == [
            ["file", "index", "type", "value"],
            ["a,b.html", "0", "TEXT", "x"],
            ["a,b.html", "1", "TEXT", "one,\ntwo"],
        ]
