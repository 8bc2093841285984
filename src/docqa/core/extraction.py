"""TextExtractor -- turn an uploaded artifact into one text string."""

import asyncio
import codecs
import logging

from docqa.infra.pdf_utils import extract_text_from_pdf
from docqa.infra.telemetry import (
    ATTR_ARTIFACT_MEDIA_TYPE,
    ATTR_ARTIFACT_SIZE,
    ATTR_EXTRACTED_LEN,
    SPAN_EXTRACT,
    tracer,
)

from .errors import ExtractionFailed, UnsupportedArtifact
from .models import PDF_MEDIA_TYPES, TEXT_MEDIA_TYPES, Artifact

logger = logging.getLogger(__name__)

DEFAULT_TEXT_ENCODING = "utf-8"
_UTF8 = "utf-8"
_UTF8_STRIP_BOM = "utf-8-sig"


def _base_media_type(media_type: str) -> str:
    return media_type.split(";", 1)[0].strip().lower()


class TextExtractor:
    """Stateless converter from PDF or plain-text artifacts to text.

    PDF pages are decoded in ascending order off the event loop; words
    within a page are space-joined and pages are newline-joined. Plain
    text is decoded verbatim. Anything else is rejected before any
    decoding is attempted.
    """

    @staticmethod
    def supports(media_type: str) -> bool:
        base = _base_media_type(media_type)
        return base in PDF_MEDIA_TYPES or base in TEXT_MEDIA_TYPES

    async def extract(self, artifact: Artifact) -> str:
        """Return the text of *artifact*.

        Raises:
            UnsupportedArtifact: the media type is neither PDF nor plain text.
            ExtractionFailed: the bytes could not be decoded.
        """
        media_type = artifact.base_media_type
        if not self.supports(media_type):
            raise UnsupportedArtifact(artifact.media_type, artifact_name=artifact.name)

        with tracer.start_as_current_span(SPAN_EXTRACT) as span:
            span.set_attribute(ATTR_ARTIFACT_MEDIA_TYPE, media_type)
            span.set_attribute(ATTR_ARTIFACT_SIZE, len(artifact.data))
            if media_type in PDF_MEDIA_TYPES:
                text = await self._extract_pdf(artifact)
            else:
                text = self._decode_text(artifact)
            span.set_attribute(ATTR_EXTRACTED_LEN, len(text))

        logger.info(
            "Extracted %d characters from %s (%s)", len(text), artifact.name, media_type
        )
        return text

    async def _extract_pdf(self, artifact: Artifact) -> str:
        try:
            return await asyncio.to_thread(extract_text_from_pdf, artifact.data)
        except Exception as exc:
            logger.warning("PDF extraction failed for %s: %s", artifact.name, exc)
            raise ExtractionFailed(
                "Failed to extract text from PDF", artifact_name=artifact.name
            ) from exc

    @staticmethod
    def _decode_text(artifact: Artifact) -> str:
        encoding = artifact.charset or DEFAULT_TEXT_ENCODING
        try:
            # A leading UTF-8 byte order mark is not part of the text.
            if codecs.lookup(encoding).name == _UTF8:
                encoding = _UTF8_STRIP_BOM
            return artifact.data.decode(encoding, errors="replace")
        except LookupError as exc:
            raise ExtractionFailed(
                f"Unknown text encoding: {encoding}", artifact_name=artifact.name
            ) from exc
