"""Tests for the assist-extract CLI."""

import json
from pathlib import Path

from click.testing import CliRunner

from assistant_gateway.cli.extract_file import extract_files, format_bytes, load_upload


class TestFormatBytes:
    """Test suite for format_bytes function."""

    def test_bytes(self):
        assert format_bytes(512) == "512.0B"

    def test_kilobytes(self):
        assert format_bytes(1536) == "1.5KB"

    def test_megabytes(self):
        assert format_bytes(1024 * 1024 * 2) == "2.0MB"

    def test_terabytes(self):
        assert format_bytes(1024**4) == "1.0TB"


def test_load_upload_guesses_mime_type(tmp_path: Path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")

    upload = load_upload(path)

    assert upload.name == "notes.txt"
    assert upload.mime_type == "text/plain"
    assert upload.size == 5
    assert upload.content == b"hello"


def test_formatted_output(tmp_path: Path):
    path = tmp_path / "notes.txt"
    path.write_text("Budget meeting on Monday", encoding="utf-8")

    result = CliRunner().invoke(extract_files, [str(path)])

    assert result.exit_code == 0
    assert "FILE: notes.txt" in result.output
    assert "Extractor:  text" in result.output
    assert "Budget meeting on Monday" in result.output


def test_json_output_with_max_chars(tmp_path: Path):
    first = tmp_path / "a.txt"
    first.write_text("abcdefghijklmnopqrstuvwxyz", encoding="utf-8")
    second = tmp_path / "b.json"
    second.write_text("[1]", encoding="utf-8")

    result = CliRunner().invoke(extract_files, ["--json", "--max-chars", "10", str(first), str(second)])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert [item["extractor"] for item in output] == ["text", "json"]
    assert output[0]["truncated"] is True
    assert "abcdefghij\n... (content truncated)" in output[0]["content"]
    assert output[1]["truncated"] is False


def test_missing_file_is_usage_error(tmp_path: Path):
    result = CliRunner().invoke(extract_files, [str(tmp_path / "nope.pdf")])

    assert result.exit_code == 2


def test_requires_at_least_one_path():
    result = CliRunner().invoke(extract_files, [])

    assert result.exit_code == 2
