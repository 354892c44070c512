"""
headings.py

Scene heading detection and repair for PDF-extracted screenplay text.

Every stage that needs to know "is this a slugline?" goes through this module,
so the prefix list below is the single place where heading forms are defined.

Prefix ordering
---------------
Regex alternation is first-match-wins. Compound forms (INT./EXT, I/E, ...)
are listed before the plain forms (INT, EXT) so that the reported prefix is
the most specific one. The list is compiled once into a single pattern with
one named group per entry.

Split headings
--------------
Layout extraction sometimes puts the "INT." of an "INT./EXT." heading on its
own line, leaving a line such as "/EXT. KITCHEN - DAY". repair_split_scene_headings()
restores the full prefix. It does not try to fix any other malformation.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple

# (canonical prefix, pattern). Order matters: most specific first.
SCENE_HEADING_PREFIXES: List[Tuple[str, str]] = [
    ("INT./EXT.", r"INT\./EXT"),
    ("I./E.", r"I\./E"),
    ("INT/EXT.", r"INT\.?/EXT"),
    ("EXT/INT.", r"EXT\.?/INT"),
    ("I/E.", r"I/E"),
    ("EST.", r"EST"),
    ("INT.", r"INT"),
    ("EXT.", r"EXT"),
]


def _compile_prefix_re(prefixes: List[Tuple[str, str]]) -> re.Pattern:
    groups = "|".join(f"(?P<p{i}>{pat})" for i, (_, pat) in enumerate(prefixes))
    return re.compile(rf"^(?:{groups})[.\s]", re.IGNORECASE)


SCENE_HEADING_RE = _compile_prefix_re(SCENE_HEADING_PREFIXES)

SPLIT_EXT_RE = re.compile(r"^(?P<indent>\s*)/EXT\.(?=\s*[A-Z])")

# "/EXT. LOCATION - DAY" or "/EXT. LOCATION" in capitals.
_COMPLETE_SPLIT_HEADING_RE = re.compile(
    r"""^/EXT\.\s*
    (?:
        .+?\s+-\s+(?:DAY|NIGHT|CONTINUOUS|MOMENTS\s+LATER|LATER|DAWN|DUSK)\b.* |
        [A-Z][A-Z0-9 '.&/-]*
    )$
    """,
    re.VERBOSE,
)


def scene_heading_prefix(line: str) -> Optional[str]:
    """
    Return the canonical prefix of a scene heading, or None.

    Leading/trailing whitespace is ignored. Matching is case-insensitive, as
    drafts often use "Int." or "ext." on imported scripts.
    """
    m = SCENE_HEADING_RE.match(line.strip())
    if not m:
        return None
    for i, (canonical, _) in enumerate(SCENE_HEADING_PREFIXES):
        if m.group(f"p{i}") is not None:
            return canonical
    return None


def is_scene_heading(line: str) -> bool:
    return scene_heading_prefix(line) is not None


def _looks_like_complete_split_heading(s: str) -> bool:
    return bool(_COMPLETE_SPLIT_HEADING_RE.match(s))


def repair_split_scene_headings(lines: List[str]) -> List[str]:
    """
    Rewrite "/EXT. ..." lines into "INT./EXT. ..." where the INT. was split off.

    A line is rewritten when the previous line is exactly "INT.", is blank,
    or is missing (document start), or when the line already reads like a
    complete heading. An orphaned "INT." line directly above is merged into
    the repaired heading.

    Args:
        lines: Line sequence after noise stripping.

    Returns:
        A new list; all other lines are passed through unchanged.
    """
    out: List[str] = []
    for ln in lines:
        m = SPLIT_EXT_RE.match(ln)
        if not m:
            out.append(ln)
            continue

        prev = out[-1].strip() if out else ""
        orphan_int = prev == "INT."
        if orphan_int or not prev or _looks_like_complete_split_heading(ln.strip()):
            if orphan_int:
                out.pop()
            ln = f"{m.group('indent')}INT./EXT.{ln[m.end():]}"
        out.append(ln)
    return out
