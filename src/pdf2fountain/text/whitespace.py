from __future__ import annotations

import re
from typing import List

MAX_BLANK_RUN = 2

_LEADING_WS_RE = re.compile(r"^\s*")
_INNER_WS_RE = re.compile(r"[ \t]+")


def clean_spaces(line: str) -> str:
    """Collapse space/tab runs after the indentation; keep the indentation."""
    indent = _LEADING_WS_RE.match(line).group(0)
    content = _INNER_WS_RE.sub(" ", line[len(indent):])
    return (indent + content).rstrip()


def normalize_whitespace(lines: List[str]) -> List[str]:
    """
    Final tidy-up of the reconstructed lines.

    - leading whitespace kept verbatim, inner runs collapsed, right-trimmed
    - runs of blank lines capped at MAX_BLANK_RUN
    - blank lines at the start and end of the document dropped
    """
    out: List[str] = []
    blank_run = 0
    for ln in lines:
        ln = clean_spaces(ln)
        if not ln:
            blank_run += 1
            if blank_run > MAX_BLANK_RUN:
                continue
        else:
            blank_run = 0
        out.append(ln)

    start = 0
    while start < len(out) and not out[start]:
        start += 1
    end = len(out)
    while end > start and not out[end - 1]:
        end -= 1
    return out[start:end]
