#!/usr/bin/env python3
"""
Inspect a reconstructed .fountain file.

This script is intentionally simple and "human-in-the-loop":
- Print how many lines ended up as each kind (cue, dialogue, action, ...).
- Optionally print every line with its kind, or only one kind.
- Flag leftovers the cleaner should have removed (page numbers, CONTINUED).

Use cases:
1) Quick quality check after an import:
   python scripts/inspect_fountain.py --file data/out/script.fountain

2) Eyeball all detected character cues:
   python scripts/inspect_fountain.py --file data/out/script.fountain --kind character_cue

3) Dump the first 80 lines with labels:
   python scripts/inspect_fountain.py --file data/out/script.fountain --show --top 80
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from pdf2fountain.io.jsonio import load_text
from pdf2fountain.text.line_kinds import LineKind, classify_fountain_lines, count_line_kinds

LEFTOVER_KINDS = {LineKind.PAGE_NUMBER, LineKind.CONTINUED_MARKER}


def print_summary(lines: List[str]) -> None:
    counts = count_line_kinds(lines)
    width = max(len(k) for k in counts)
    print(f"lines={len(lines)}")
    for kind, n in counts.items():
        if n:
            print(f"  {kind.ljust(width)}  {n}")


def print_labelled(lines: List[str], kind: Optional[str], top: int) -> None:
    shown = 0
    for i, (ln, k) in enumerate(zip(lines, classify_fountain_lines(lines)), start=1):
        if kind and k.value != kind:
            continue
        print(f"{i:>6}  {k.value:<16} {ln}")
        shown += 1
        if top and shown >= top:
            break


def main() -> None:
    ap = argparse.ArgumentParser(description="Inspect a reconstructed Fountain file.")
    ap.add_argument("--file", required=True, help="Path to the .fountain file.")
    ap.add_argument("--show", action="store_true", help="Print each line with its kind.")
    ap.add_argument(
        "--kind",
        choices=[k.value for k in LineKind],
        help="Only print lines of this kind (implies --show).",
    )
    ap.add_argument("--top", type=int, default=0, help="Max lines to print (0 = all).")
    args = ap.parse_args()

    lines = load_text(args.file).splitlines()
    print_summary(lines)

    leftovers = [
        i for i, k in enumerate(classify_fountain_lines(lines), start=1) if k in LEFTOVER_KINDS
    ]
    if leftovers:
        print(f"[warn] {len(leftovers)} leftover noise lines, first at line {leftovers[0]}")

    if args.show or args.kind:
        print_labelled(lines, args.kind, args.top)


if __name__ == "__main__":
    main()
