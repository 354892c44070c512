#!/usr/bin/env python
import argparse
import logging
import os

from pdf2fountain.io.pdf_text_extractor import DEFAULT_Y_TOLERANCE, is_pdf_file
from pdf2fountain.pipeline.fountain_import import run_pdf_to_fountain
from pdf2fountain.text.cleaners import DEFAULT_HEADER_LITERALS


def _env_header_literals() -> list:
    extra = os.environ.get("PDF2FOUNTAIN_HEADER_LITERALS", "")
    return [x.strip() for x in extra.split(",") if x.strip()]


def build_parser() -> argparse.ArgumentParser:
    """Defaults are read from the environment when the parser is built."""
    ap = argparse.ArgumentParser(description="Reconstruct a screenplay PDF as Fountain text.")
    ap.add_argument("--pdf", required=True, help="Path to the screenplay PDF.")
    ap.add_argument("--out", help="Output .fountain path (default: next to the PDF).")
    ap.add_argument("--json_out", help="Optional path for the extraction result as JSON.")
    ap.add_argument(
        "--y_tolerance",
        type=float,
        default=os.environ.get("PDF2FOUNTAIN_Y_TOLERANCE", str(DEFAULT_Y_TOLERANCE)),
        help="Max baseline delta (points) for fragments on the same line.",
    )
    ap.add_argument(
        "--header",
        action="append",
        default=_env_header_literals(),
        help="Extra header/footer line to blank before the first scene (repeatable).",
    )
    ap.add_argument("--no_fix_encoding", action="store_true", help="Skip mojibake repair.")
    ap.add_argument(
        "--fountain_spacing",
        action="store_true",
        help="Insert the blank lines Fountain needs around headings, cues and dialogue.",
    )
    ap.add_argument("--raw", action="store_true", help="Write the uncleaned extraction.")
    ap.add_argument("--progress", action="store_true", help="Show a progress bar over pages.")
    ap.add_argument("--verbose", action="store_true", help="Debug logging.")

    return ap


def main(argv=None) -> None:
    """
    Command-line entry point for the PDF → Fountain import.

    This script is intentionally thin: all the real work happens in
    pdf2fountain.pipeline.fountain_import.run_pdf_to_fountain().
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not is_pdf_file(args.pdf):
        print(f"[warn] {args.pdf} does not look like a PDF; trying anyway", flush=True)

    out = args.out or os.path.splitext(args.pdf)[0] + ".fountain"
    result = run_pdf_to_fountain(
        pdf=args.pdf,
        out=out,
        json_out=args.json_out,
        y_tolerance=args.y_tolerance,
        fix_encoding=not args.no_fix_encoding,
        header_literals=list(DEFAULT_HEADER_LITERALS) + list(args.header),
        fountain_spacing=args.fountain_spacing,
        raw=args.raw,
        progress=args.progress,
    )
    if not result.success:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
