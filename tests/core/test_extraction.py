"""Tests for TextExtractor."""

from unittest.mock import patch

import pytest

from docqa.core.errors import ExtractionFailed, UnsupportedArtifact
from docqa.core.extraction import TextExtractor
from docqa.core.models import Artifact


def _pdf(data: bytes, media_type: str = "application/pdf") -> Artifact:
    return Artifact(name="doc.pdf", media_type=media_type, data=data)


def _txt(data: bytes, media_type: str = "text/plain") -> Artifact:
    return Artifact(name="doc.txt", media_type=media_type, data=data)


class TestSupports:
    @pytest.mark.parametrize(
        "media_type",
        ["application/pdf", "application/x-pdf", "text/plain", "text/plain; charset=utf-8"],
    )
    def test_supported(self, media_type):
        assert TextExtractor.supports(media_type)

    @pytest.mark.parametrize(
        "media_type",
        ["", "text/html", "application/msword", "image/png"],
    )
    def test_unsupported(self, media_type):
        assert not TextExtractor.supports(media_type)


class TestPdfExtraction:
    @pytest.mark.asyncio
    async def test_pages_in_order_newline_separated(self, make_pdf):
        data = make_pdf("First page text", "Second page text", "Third page text")
        text = await TextExtractor().extract(_pdf(data))
        assert text == "First page text\nSecond page text\nThird page text"

    @pytest.mark.asyncio
    async def test_words_joined_by_single_space(self, make_pdf):
        data = make_pdf("Clause   4   applies")
        text = await TextExtractor().extract(_pdf(data))
        assert text == "Clause 4 applies"

    @pytest.mark.asyncio
    async def test_deterministic(self, make_pdf):
        artifact = _pdf(make_pdf("alpha beta", "gamma"))
        extractor = TextExtractor()
        assert await extractor.extract(artifact) == await extractor.extract(artifact)

    @pytest.mark.asyncio
    async def test_x_pdf_media_type(self, make_pdf):
        text = await TextExtractor().extract(
            _pdf(make_pdf("legacy type"), media_type="application/x-pdf")
        )
        assert text == "legacy type"

    @pytest.mark.asyncio
    async def test_empty_bytes_fail(self):
        with pytest.raises(ExtractionFailed) as exc_info:
            await TextExtractor().extract(_pdf(b""))
        assert exc_info.value.artifact_name == "doc.pdf"

    @pytest.mark.asyncio
    async def test_decoder_error_wrapped(self):
        with patch(
            "docqa.core.extraction.extract_text_from_pdf",
            side_effect=RuntimeError("cannot find startxref"),
        ):
            with pytest.raises(ExtractionFailed):
                await TextExtractor().extract(_pdf(b"%PDF-1.7 broken"))


class TestPlainText:
    @pytest.mark.asyncio
    async def test_verbatim_utf8(self):
        raw = "  Héllo\r\n\tworld  \n".encode("utf-8")
        assert await TextExtractor().extract(_txt(raw)) == "  Héllo\r\n\tworld  \n"

    @pytest.mark.asyncio
    async def test_utf8_byte_order_mark_dropped(self):
        text = await TextExtractor().extract(_txt(b"\xef\xbb\xbfhello"))
        assert text == "hello"

    @pytest.mark.asyncio
    async def test_declared_utf8_byte_order_mark_dropped(self):
        artifact = _txt(b"\xef\xbb\xbfhello", "text/plain; charset=UTF-8")
        assert await TextExtractor().extract(artifact) == "hello"

    @pytest.mark.asyncio
    async def test_declared_charset(self):
        raw = "café".encode("latin-1")
        text = await TextExtractor().extract(_txt(raw, "text/plain; charset=latin-1"))
        assert text == "café"

    @pytest.mark.asyncio
    async def test_invalid_bytes_replaced(self):
        text = await TextExtractor().extract(_txt(b"ok\xff"))
        assert text == "ok�"

    @pytest.mark.asyncio
    async def test_unknown_charset_fails(self):
        with pytest.raises(ExtractionFailed):
            await TextExtractor().extract(_txt(b"x", "text/plain; charset=nope-42"))

    @pytest.mark.asyncio
    async def test_deterministic(self):
        artifact = _txt(b"same bytes")
        extractor = TextExtractor()
        assert await extractor.extract(artifact) == await extractor.extract(artifact)


class TestUnsupported:
    @pytest.mark.asyncio
    async def test_rejected_without_decoding(self):
        artifact = Artifact(name="page.html", media_type="text/html", data=b"<p>x</p>")
        with patch("docqa.core.extraction.extract_text_from_pdf") as decoder:
            with pytest.raises(UnsupportedArtifact) as exc_info:
                await TextExtractor().extract(artifact)
        decoder.assert_not_called()
        assert exc_info.value.media_type == "text/html"
