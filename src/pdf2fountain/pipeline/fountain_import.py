"""
fountain_import.py

This module implements the end-to-end PDF → Fountain import.

Overview
--------
Given a screenplay PDF, the import:

1) Extracts raw lines from the PDF (pdf2fountain.io.pdf_text_extractor).
2) Repairs encoding damage and line endings.
3) Drops title-page boilerplate before the first scene heading.
4) Blanks page numbers, CONTINUED markers and pre-script header literals.
5) Repairs scene headings whose "INT." was split onto its own line.
6) Merges hard-wrapped dialogue following each character cue.
7) Optionally inserts the blank lines Fountain needs between elements
   (off by default; it is the only stage that adds lines).
8) Normalizes whitespace.

Steps 3-8 work on a list of lines, each stage returning a new full list.
They are pure and synchronous: the only I/O is the PDF read in step 1.

This module defines:
    - reconstruct_lines(): steps 3-8 over a line list.
    - clean_pdf_text_for_fountain(): steps 2-8 over raw text.
    - import_pdf_as_fountain(): the public entry point, never raises.
    - run_pdf_to_fountain(): command-line driver writing the outputs.
"""
from __future__ import annotations

import dataclasses
import logging
import time
from typing import Any, Callable, Iterable, List, Optional

import pdfplumber

from pdf2fountain.io.jsonio import safe_write_json, safe_write_text
from pdf2fountain.io.pdf_text_extractor import (
    DEFAULT_Y_TOLERANCE,
    ExtractionResult,
    PdfSource,
    extract_pdf_text,
)
from pdf2fountain.text.cleaners import (
    DEFAULT_HEADER_LITERALS,
    filter_title_page,
    strip_structural_noise,
)
from pdf2fountain.text.dialogue import merge_dialogue_blocks
from pdf2fountain.text.encoding import (
    detect_encoding_issues,
    fix_character_encoding,
    normalize_line_endings,
)
from pdf2fountain.text.headings import repair_split_scene_headings
from pdf2fountain.text.spacing import enforce_fountain_spacing
from pdf2fountain.text.whitespace import normalize_whitespace

logger = logging.getLogger(__name__)


def reconstruct_lines(
    lines: List[str],
    *,
    header_literals: Iterable[str] = DEFAULT_HEADER_LITERALS,
    fountain_spacing: bool = False,
) -> List[str]:
    """
    Run the line stages in order and return the Fountain lines.

    The output is never longer than the input unless fountain_spacing is set.
    """
    n_in = len(lines)
    lines = filter_title_page(lines)
    logger.debug("title page filter: %d -> %d lines", n_in, len(lines))
    lines = strip_structural_noise(lines, header_literals=header_literals)
    lines = repair_split_scene_headings(lines)
    logger.debug("heading repair: %d lines", len(lines))
    lines = merge_dialogue_blocks(lines)
    logger.debug("dialogue merge: %d lines", len(lines))
    if fountain_spacing:
        lines = enforce_fountain_spacing(lines)
        logger.debug("fountain spacing: %d lines", len(lines))
    return normalize_whitespace(lines)


def clean_pdf_text_for_fountain(
    text: str,
    *,
    fix_encoding: bool = True,
    header_literals: Iterable[str] = DEFAULT_HEADER_LITERALS,
    fountain_spacing: bool = False,
) -> str:
    """
    Clean raw PDF-extracted text into Fountain text.

    Args:
        text: Raw lines joined by newlines.
        fix_encoding: Repair mojibake and U+FFFD characters first.
        header_literals: Header/footer lines to blank before the first scene.
        fountain_spacing: Insert the blank lines Fountain needs between elements.

    Returns:
        The cleaned text, lines joined by "\\n", without trailing newline.
    """
    if fix_encoding and detect_encoding_issues(text):
        logger.debug("repairing character encoding")
        text = fix_character_encoding(text)
    lines = normalize_line_endings(text).split("\n")
    return "\n".join(reconstruct_lines(
        lines, header_literals=header_literals, fountain_spacing=fountain_spacing
    ))


def import_pdf_as_fountain(
    source: PdfSource,
    *,
    pdf_open: Callable[..., Any] = pdfplumber.open,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
    fix_encoding: bool = True,
    header_literals: Iterable[str] = DEFAULT_HEADER_LITERALS,
    fountain_spacing: bool = False,
    progress: bool = False,
) -> ExtractionResult:
    """
    Extract a screenplay PDF and reconstruct it as Fountain text.

    Failures to decode the PDF come back as success=False with the library's
    message; this function does not raise for them.
    """
    raw = extract_pdf_text(
        source, pdf_open=pdf_open, y_tolerance=y_tolerance, progress=progress
    )
    if not raw.success:
        return raw
    cleaned = clean_pdf_text_for_fountain(
        raw.text,
        fix_encoding=fix_encoding,
        header_literals=header_literals,
        fountain_spacing=fountain_spacing,
    )
    return dataclasses.replace(raw, text=cleaned)


def run_pdf_to_fountain(
    *,
    pdf: str,
    out: str,
    json_out: Optional[str] = None,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
    fix_encoding: bool = True,
    header_literals: Iterable[str] = DEFAULT_HEADER_LITERALS,
    fountain_spacing: bool = False,
    raw: bool = False,
    progress: bool = False,
    pdf_open: Callable[..., Any] = pdfplumber.open,
) -> ExtractionResult:
    """
    Command-line driver: convert one PDF and write the outputs.

    Args:
        pdf: Path to the screenplay PDF.
        out: Path of the .fountain file to write.
        json_out: Optional path for the ExtractionResult as JSON.
        y_tolerance: Baseline tolerance for line grouping.
        fix_encoding: Repair mojibake before cleaning.
        header_literals: Header/footer lines to blank before the first scene.
        fountain_spacing: Insert the blank lines Fountain needs between elements.
        raw: Write the uncleaned extraction instead (debugging).
        progress: Show a progress bar over pages.
        pdf_open: PDF opener; injectable for tests.

    Returns:
        The ExtractionResult that was written. Nothing is written to `out`
        when extraction failed.
    """
    t0 = time.time()
    print("[phase] extract + reconstruct...", flush=True)
    if raw:
        result = extract_pdf_text(
            pdf, pdf_open=pdf_open, y_tolerance=y_tolerance, progress=progress
        )
    else:
        result = import_pdf_as_fountain(
            pdf,
            pdf_open=pdf_open,
            y_tolerance=y_tolerance,
            fix_encoding=fix_encoding,
            header_literals=header_literals,
            fountain_spacing=fountain_spacing,
            progress=progress,
        )

    if json_out:
        safe_write_json(json_out, result.to_dict())

    if not result.success:
        print(f"[error] {pdf}: {result.error}", flush=True)
        return result

    if result.page_count and not result.text.strip():
        print(f"[warn] pages={result.page_count} but no text recovered; scanned PDF?", flush=True)

    safe_write_text(out, result.text)
    n_lines = len(result.text.splitlines())
    print(
        f"[ok] pages={result.page_count} lines={n_lines} -> {out} ({time.time() - t0:.1f}s)",
        flush=True,
    )
    return result
