"""
pdf_text_extractor.py

This module turns a screenplay PDF into raw text lines in reading order.

It is the only module that touches the PDF library (pdfplumber).

High-level purpose
------------------
Given a PDF (bytes, path or binary file object), this module:

1) Reads positioned text fragments from every page
2) Groups fragments into lines by the vertical position of their baseline:
   a fragment within y_tolerance of the previous one continues the line,
   a larger jump starts a new line
3) Joins same-line fragments, inserting a single space only when neither
   side already has whitespace
4) Separates pages with one blank line (none after the last page)

Any failure of the PDF library is caught here and reported as an
ExtractionResult with success=False. Nothing is raised past extract_pdf_text().

The text returned here is NOT cleaned; see pdf2fountain.pipeline.fountain_import.
"""
from __future__ import annotations

import io
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, BinaryIO, Callable, Dict, Iterable, List, Optional, Tuple, Union

import pdfplumber
from tqdm import tqdm

logger = logging.getLogger(__name__)

DEFAULT_Y_TOLERANCE = 2.0

PdfSource = Union[bytes, bytearray, str, os.PathLike, BinaryIO]


@dataclass(frozen=True)
class RawFragment:
    """
    text: fragment text as reported by the PDF library
    baseline_y: vertical position of the fragment's baseline
    page_index: 0-based page index
    """
    text: str
    baseline_y: float
    page_index: int


@dataclass(frozen=True)
class ExtractionResult:
    text: str
    page_count: int
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_pdf_file(path: Union[str, os.PathLike], content_type: Optional[str] = None) -> bool:
    if content_type == "application/pdf":
        return True
    return os.fspath(path).lower().endswith(".pdf")


def page_fragments(page: Any, page_index: int) -> List[RawFragment]:
    """
    Read text fragments of one pdfplumber page in content-stream order.

    keep_blank_chars keeps runs of words together the way the PDF stores them;
    use_text_flow preserves the stream order instead of re-sorting by position.
    """
    words = page.extract_words(keep_blank_chars=True, use_text_flow=True) or []
    return [
        RawFragment(text=w.get("text", ""), baseline_y=float(w["bottom"]), page_index=page_index)
        for w in words
    ]


def group_fragments_into_lines(
    fragments: Iterable[RawFragment],
    *,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
) -> List[str]:
    """
    Group one page's fragments into stripped, non-empty lines.
    """
    lines: List[str] = []
    cur = ""
    last_y: Optional[float] = None

    for frag in fragments:
        if last_y is not None and abs(frag.baseline_y - last_y) > y_tolerance:
            if cur.strip():
                lines.append(cur.strip())
            cur = frag.text
        else:
            if cur and frag.text and not cur[-1].isspace() and not frag.text[0].isspace():
                cur += " "
            cur += frag.text
        last_y = frag.baseline_y

    if cur.strip():
        lines.append(cur.strip())
    return lines


def _as_pdf_input(source: PdfSource) -> Any:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source


def extract_raw_lines(
    source: PdfSource,
    *,
    pdf_open: Callable[..., Any] = pdfplumber.open,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
    progress: bool = False,
) -> Tuple[List[str], int]:
    """
    Extract raw lines from all pages. Errors from the PDF library propagate.

    Returns (lines, page_count).
    """
    lines: List[str] = []
    with pdf_open(_as_pdf_input(source)) as pdf:
        pages = list(pdf.pages)
        page_count = len(pages)
        for idx, page in enumerate(tqdm(pages, desc="pdf-pages", disable=not progress)):
            page_lines = group_fragments_into_lines(
                page_fragments(page, idx), y_tolerance=y_tolerance
            )
            if not page_lines:
                logger.debug("page %d yielded no text", idx + 1)
            lines.extend(page_lines)
            if idx < page_count - 1:
                lines.append("")

    logger.debug("extracted %d lines from %d pages", len(lines), page_count)
    return lines, page_count


def extract_pdf_text(
    source: PdfSource,
    *,
    pdf_open: Callable[..., Any] = pdfplumber.open,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
    progress: bool = False,
) -> ExtractionResult:
    """
    Extract raw text from a PDF without raising.

    Args:
        source: PDF bytes, a path, or a binary file object.
        pdf_open: Opener returning a context manager with a .pages list;
            injectable for tests.
        y_tolerance: Maximum baseline delta (PDF points) for two fragments to
            be on the same line.
        progress: Show a tqdm bar over pages.

    Returns:
        ExtractionResult with the raw lines joined by "\\n". On failure,
        success=False, empty text, page_count=0 and the library's message.
    """
    try:
        lines, page_count = extract_raw_lines(
            source, pdf_open=pdf_open, y_tolerance=y_tolerance, progress=progress
        )
    except Exception as exc:
        logger.error("error extracting PDF: %s", exc)
        return ExtractionResult(
            text="",
            page_count=0,
            success=False,
            error=str(exc) or type(exc).__name__,
        )

    return ExtractionResult(text="\n".join(lines), page_count=page_count, success=True)
