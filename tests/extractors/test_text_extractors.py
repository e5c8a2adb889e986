"""Tests for the text, JSON and generic fallback extractors."""

from __future__ import annotations

import json

import pytest

from assistant_gateway.extractors.base import TRUNCATION_MARKER
from assistant_gateway.extractors.generic_extractor import GenericExtractor
from assistant_gateway.extractors.text_extractor import JSONExtractor, TextExtractor


class TestTextExtractor:
    """Test suite for plain text and CSV uploads."""

    @pytest.mark.asyncio
    async def test_plain_text_is_decoded_with_header(self, make_upload):
        """Text uploads are decoded as UTF-8 under a MIME header."""
        upload = make_upload("notes.txt", "Meeting at 10am".encode(), "text/plain")

        result = await TextExtractor(upload).process()

        assert result.success is True
        assert result.extractor == "text"
        assert result.content == "File Content (text/plain):\nMeeting at 10am"
        assert result.truncated is False

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_replaced_not_fatal(self, make_upload):
        """Undecodable bytes are replaced rather than failing the upload."""
        upload = make_upload("data.csv", b"name,value\n\xff\xfe,1", "text/csv")

        result = await TextExtractor(upload).process()

        assert result.success is True
        assert "name,value" in result.content
        assert "\ufffd" in result.content

    @pytest.mark.asyncio
    async def test_long_text_is_truncated(self, make_upload):
        """Extracted text is bounded to the configured character budget."""
        upload = make_upload("big.txt", b"a" * 6000, "text/plain")

        result = await TextExtractor(upload).process()

        assert result.truncated is True
        assert result.content.endswith(TRUNCATION_MARKER)
        body = result.content.split("\n", 1)[1]
        assert body == "a" * 5000 + TRUNCATION_MARKER

    @pytest.mark.asyncio
    async def test_custom_max_chars(self, make_upload):
        """A smaller budget can be supplied per extractor."""
        upload = make_upload("short.txt", b"abcdefghij", "text/plain")

        result = await TextExtractor(upload, max_chars=4).process()

        assert result.content == f"File Content (text/plain):\nabcd{TRUNCATION_MARKER}"

    def test_matches_by_extension_without_mime(self, make_upload):
        """A missing MIME type falls back to the file extension."""
        assert TextExtractor.matches(make_upload("readme.md", b"# hi"))
        assert not TextExtractor.matches(make_upload("photo.png", b"\x89PNG"))


class TestJSONExtractor:
    """Test suite for JSON uploads."""

    @pytest.mark.asyncio
    async def test_valid_json_is_pretty_printed(self, make_upload):
        """Parsed JSON is re-serialised with indentation."""
        payload = {"name": "Aishath", "role": "Analyst"}
        upload = make_upload("staff.json", json.dumps(payload).encode(), "application/json")

        result = await JSONExtractor(upload).process()

        assert result.content.startswith("JSON Data from staff.json:\n")
        assert json.loads(result.content.split("\n", 1)[1]) == payload
        assert '\n  "name": "Aishath"' in result.content

    @pytest.mark.asyncio
    async def test_invalid_json_falls_back_to_raw_text(self, make_upload):
        """Unparseable JSON is passed through as raw text."""
        upload = make_upload("broken.json", b'{"name": ', "application/json")

        result = await JSONExtractor(upload).process()

        assert result.success is True
        assert result.content == 'JSON file content:\n{"name": '


class TestGenericExtractor:
    """Test suite for the fallback extractor."""

    @pytest.mark.asyncio
    async def test_readable_runs_are_extracted(self, make_upload):
        """Printable text inside unknown binaries is surfaced."""
        content = b"\x00\x01\x02Readable text content inside a binary container file for testing\x00"
        upload = make_upload("blob.bin", content, "application/octet-stream")

        result = await GenericExtractor(upload).process()

        assert result.extractor == "generic"
        assert result.content.startswith("File: blob.bin (application/octet-stream, 0KB)")
        assert "Extracted Text:\nReadable text content inside a binary container" in result.content

    @pytest.mark.asyncio
    async def test_pure_binary_gets_placeholder(self, make_upload):
        """Files without readable text are acknowledged with a placeholder."""
        upload = make_upload("image.png", b"\x00\x01\x02\x03" * 50, "image/png")

        result = await GenericExtractor(upload).process()

        assert result.success is True
        assert "File uploaded successfully" in result.content

    def test_generic_matches_everything(self, make_upload):
        """The fallback accepts any upload."""
        assert GenericExtractor.matches(make_upload("anything.xyz", b""))
