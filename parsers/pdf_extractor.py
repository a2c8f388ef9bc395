"""
PDF text fragment extraction.

Turns PDF bytes into pages of positioned text fragments using pdfplumber.
Fragment coordinates are in PDF points from the top-left corner of the
page: x is the left edge, y the top edge.
"""

import asyncio
from dataclasses import dataclass, field
from io import BytesIO
from typing import Iterator, Optional

import pdfplumber
import structlog

from config import settings
from exceptions import PdfExtractionError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PdfFragment:
    """One run of text on a page."""
    x: float
    y: float
    text: str
    width: float = 0.0


@dataclass(frozen=True)
class PdfPage:
    number: int
    fragments: tuple = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "fragments", tuple(self.fragments))

    def text_rows(self) -> list[list[str]]:
        """Fragments as single-cell rows, for the regex row helpers."""
        return [[fragment.text] for fragment in self.fragments]


@dataclass(frozen=True)
class PdfDocument:
    pages: tuple = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "pages", tuple(self.pages))

    @property
    def is_empty(self) -> bool:
        return len(self.pages) == 0

    def text_rows(self) -> Iterator[list[str]]:
        for page in self.pages:
            yield from page.text_rows()


def extract_fragments(
    pdf_bytes: bytes,
    x_tolerance: Optional[float] = None,
    y_tolerance: Optional[float] = None,
) -> PdfDocument:
    """
    Extract positioned words from every page.

    Args:
        pdf_bytes: Raw PDF content
        x_tolerance: Character gap that still joins a word (default from settings)
        y_tolerance: Vertical gap that still shares a line (default from settings)

    Returns:
        PdfDocument with one PdfPage per page, numbered from 1

    Raises:
        PdfExtractionError: If the PDF cannot be opened or read
    """
    x_tolerance = settings.pdf_x_tolerance if x_tolerance is None else x_tolerance
    y_tolerance = settings.pdf_y_tolerance if y_tolerance is None else y_tolerance

    try:
        pages = []
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            for number, page in enumerate(pdf.pages, start=1):
                words = page.extract_words(
                    keep_blank_chars=True,
                    x_tolerance=x_tolerance,
                    y_tolerance=y_tolerance,
                )
                pages.append(PdfPage(
                    number=number,
                    fragments=[
                        PdfFragment(
                            x=float(word["x0"]),
                            y=float(word["top"]),
                            text=word["text"],
                            width=float(word["x1"]) - float(word["x0"]),
                        )
                        for word in words
                    ],
                ))
    except Exception as e:
        logger.error("pdf_extraction_failed", error=str(e), size=len(pdf_bytes or b""))
        raise PdfExtractionError(
            "Could not extract text from PDF",
            details={"error": str(e)}
        ) from e

    logger.debug(
        "pdf_fragments_extracted",
        pages=len(pages),
        fragments=sum(len(page.fragments) for page in pages)
    )
    return PdfDocument(pages=pages)


async def extract_fragments_async(pdf_bytes: bytes) -> PdfDocument:
    """Run extract_fragments in a worker thread."""
    return await asyncio.to_thread(extract_fragments, pdf_bytes)
