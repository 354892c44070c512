"""
encoding.py

Repairs character-encoding damage common in screenplays that went through a
PDF or a copy-paste on their way here.

Two kinds of damage are handled:

1) UTF-8 bytes decoded as Windows-1252 ("mojibake"), e.g. "â€™" for "'".
   These are replaced by a fixed table.
2) U+FFFD replacement characters, where the original glyph is lost. We guess
   from the neighbours: between two alphanumerics it was almost always an
   apostrophe (as in "don\ufffdt"), next to whitespace a quote, otherwise an
   apostrophe again since that is the most common casualty in scripts.
"""
from __future__ import annotations

import re
from typing import List, Tuple

REPLACEMENT_CHAR = "\ufffd"

MOJIBAKE_SEQUENCES: List[Tuple[str, str]] = [
    ("â€™", "'"),
    ("â€˜", "'"),
    ("â€œ", '"'),
    ("â€\x9d", '"'),
    ("â€”", "—"),
    ("â€“", "–"),
    ("â€¦", "…"),
]

_ALNUM_RE = re.compile(r"[A-Za-z0-9]")


def detect_encoding_issues(text: str) -> bool:
    if REPLACEMENT_CHAR in text:
        return True
    return any(seq in text for seq, _ in MOJIBAKE_SEQUENCES)


def _guess_replacement(text: str, i: int) -> str:
    before = text[i - 1] if i > 0 else ""
    after = text[i + 1] if i + 1 < len(text) else ""
    if _ALNUM_RE.match(before) and _ALNUM_RE.match(after):
        return "'"
    if before.isspace() or after.isspace():
        return '"'
    return "'"


def fix_character_encoding(text: str) -> str:
    """
    Replace known mojibake sequences, then resolve U+FFFD by context.

    The context for each U+FFFD is read from the text after the mojibake
    pass but before any other U+FFFD is replaced.
    """
    for seq, repl in MOJIBAKE_SEQUENCES:
        text = text.replace(seq, repl)

    if REPLACEMENT_CHAR not in text:
        return text

    chars = list(text)
    for i, c in enumerate(text):
        if c == REPLACEMENT_CHAR:
            chars[i] = _guess_replacement(text, i)
    return "".join(chars)


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")
