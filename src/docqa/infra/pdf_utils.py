"""PDF text extraction with pymupdf.

Pure infra, no domain imports.
"""

from __future__ import annotations

import pymupdf

_PDF_FILETYPE = "pdf"
_WORDS = "words"
_WORD_TEXT_INDEX = 4
_WORD_SEPARATOR = " "
_PAGE_SEPARATOR = "\n"


def page_words(page: pymupdf.Page) -> list[str]:
    """Return the words of *page* in the order the document stores them."""
    return [word[_WORD_TEXT_INDEX] for word in page.get_text(_WORDS)]


def extract_text_from_pdf(data: bytes) -> str:
    """Extract page-ordered text from raw PDF bytes.

    Words within a page are joined by a single space, pages by a
    newline. Raises whatever pymupdf raises for unreadable input.
    """
    pages: list[str] = []
    with pymupdf.open(stream=data, filetype=_PDF_FILETYPE) as doc:
        if doc.needs_pass:
            raise ValueError("PDF is encrypted")
        for page in doc:
            pages.append(_WORD_SEPARATOR.join(page_words(page)))
    return _PAGE_SEPARATOR.join(pages)
