from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from pdf2fountain.text.headings import is_scene_heading

# Title-page boilerplate, only meaningful before the first scene heading.
_TITLE_PAGE_RE = re.compile(
    r"""(
        ^by\s*$                               |  # "by" on its own line
        ^written\s+by                         |  # Written by ...
        ^early\s+draft                        |  # Early Draft
        ^draft\s+date                         |  # Draft date: ...
        ^for\s+educational\s+purposes\s+only  |  # script-site disclaimer
        ^copyright                               # Copyright (c) ...
    )""",
    re.IGNORECASE | re.VERBOSE,
)

_YEAR_LINE_RE = re.compile(r"^\d{4}")

# Page numbers: "12" or "12." on their own line, capped at three digits. Any
# digit count would also blank a bare "2024" kept after the first scene
# heading; the cost is that page 1000 and up is left in place.
_PAGE_NUMBER_RE = re.compile(r"^\d{1,3}\.?$")

_CONTINUED_RE = re.compile(
    r"""^(
        \(?CONTINUED\)?:?   |  # (CONTINUED) / CONTINUED:
        \(?CONT['’]D\)?\.?     # CONT'D. / (CONT'D)
    )$""",
    re.IGNORECASE | re.VERBOSE,
)

DEFAULT_HEADER_LITERALS: Sequence[str] = ("FADE IN", "FADE OUT")

TITLE_LINE_MAX_LEN = 50


def is_page_number(s: str) -> bool:
    return bool(_PAGE_NUMBER_RE.match(s.strip()))


def is_continued_marker(s: str) -> bool:
    return bool(_CONTINUED_RE.match(s.strip()))


def is_title_page_noise(s: str) -> bool:
    """
    True for title-page boilerplate: byline, draft info, copyright, a line
    opening with a year, or a short all-caps name-like line.

    Only valid before the first scene heading; callers gate on that.
    """
    s = s.strip()
    if not s:
        return False
    if _TITLE_PAGE_RE.search(s):
        return True
    if _YEAR_LINE_RE.match(s) and len(s) < TITLE_LINE_MAX_LEN:
        return True
    # Author names: all caps, 2-4 words.
    words = s.split()
    return (
        s == s.upper()
        and not is_scene_heading(s)
        and 2 <= len(words) <= 4
        and len(s) < TITLE_LINE_MAX_LEN
    )


def _header_literal_re(literals: Iterable[str]) -> re.Pattern:
    alts = "|".join(re.escape(x.strip()) for x in literals if x.strip())
    if not alts:
        return re.compile(r"(?!)")
    return re.compile(rf"^(?:{alts}):?$", re.IGNORECASE)


def filter_title_page(lines: List[str]) -> List[str]:
    """
    Drop title-page boilerplate appearing before the first scene heading.

    The first line matching a scene heading flips found_first_scene for good;
    from there on every line is kept, even ones that look like bylines or
    author names. Blank lines are always kept.

    Args:
        lines: Raw extracted lines in reading order.

    Returns:
        A new list without the dropped lines.
    """
    cleaned: List[str] = []
    found_first_scene = False
    for ln in lines:
        s = ln.strip()
        if not s:
            cleaned.append(ln)
            continue

        if not found_first_scene and is_scene_heading(s):
            found_first_scene = True

        if not found_first_scene and is_title_page_noise(s):
            continue

        cleaned.append(ln)
    return cleaned


def strip_structural_noise(
    lines: List[str],
    *,
    header_literals: Iterable[str] = DEFAULT_HEADER_LITERALS,
) -> List[str]:
    """
    Blank out page numbers, CONTINUED markers and pre-script header literals.

    Noise lines are replaced by "" rather than removed: downstream dialogue
    merging reads blank-line adjacency, so the spacing has to survive.

    Args:
        lines: Lines after title-page filtering.
        header_literals: Header/footer strings blanked only before the first
            scene heading (e.g. the script title repeated at the top of pages).

    Returns:
        A new list of the same length.
    """
    header_re = _header_literal_re(header_literals)
    cleaned: List[str] = []
    found_first_scene = False
    for ln in lines:
        s = ln.strip()
        if not s:
            cleaned.append(ln)
            continue

        if not found_first_scene and is_scene_heading(s):
            found_first_scene = True

        if is_page_number(s) or is_continued_marker(s):
            cleaned.append("")
            continue

        if not found_first_scene and header_re.match(s):
            cleaned.append("")
            continue

        cleaned.append(ln)
    return cleaned
