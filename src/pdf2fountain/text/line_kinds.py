"""
line_kinds.py

Line classification shared by the dialogue merger and the inspection script.

A screenplay line is one of the LineKind values below. Nothing here is
materialized on the lines themselves: each stage re-derives the kind from the
line, its immediate neighbours and the first-scene flag.

The predicates are intentionally small so that each stop condition of the
dialogue state machine can be tested on its own.
"""
from __future__ import annotations

import re
from collections import Counter
from enum import Enum
from typing import Dict, List

from pdf2fountain.text.cleaners import is_continued_marker, is_page_number
from pdf2fountain.text.headings import is_scene_heading


class LineKind(str, Enum):
    TITLE_PAGE_NOISE = "title_page_noise"
    PAGE_NUMBER = "page_number"
    CONTINUED_MARKER = "continued_marker"
    SCENE_HEADING = "scene_heading"
    CHARACTER_CUE = "character_cue"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    ACTION = "action"
    BLANK = "blank"


CUE_MIN_LEN = 2
CUE_MAX_LEN = 50
ACTION_MIN_LEN = 46

PARENTHETICAL_RE = re.compile(r"^\([^()]*\)$")

# Sentence openers typical of action description, rarely of dialogue lines.
ACTION_START_RE = re.compile(
    r"^(?:He|She|They|The|An|A|In|On|At|From|To|With|And|But|It's|It|That|This)\b"
)


def is_blank(line: str) -> bool:
    return not line.strip()


def is_all_caps(s: str) -> bool:
    return bool(s) and s == s.upper()


def is_cue_shaped(line: str) -> bool:
    """
    All caps, 2-50 chars, and not a scene heading.

    Whether it is really a cue also depends on what precedes it; see
    DialogueMerger.
    """
    s = line.strip()
    return (
        is_all_caps(s)
        and CUE_MIN_LEN <= len(s) <= CUE_MAX_LEN
        and not is_scene_heading(s)
    )


def is_parenthetical(line: str) -> bool:
    return bool(PARENTHETICAL_RE.match(line.strip()))


def looks_like_action(line: str) -> bool:
    """Mixed-case line that is long or opens like a sentence of description."""
    s = line.strip()
    if not s or is_all_caps(s):
        return False
    return len(s) >= ACTION_MIN_LEN or bool(ACTION_START_RE.match(s))


def classify_fountain_lines(lines: List[str]) -> List[LineKind]:
    """
    Label already reconstructed Fountain lines.

    A cue opens a dialogue block that runs until the next blank line; inside
    it, parenthesized lines are PARENTHETICAL and the rest DIALOGUE.
    Everything else outside a block is ACTION unless it is a heading or
    leftover noise.
    """
    kinds: List[LineKind] = []
    in_dialogue = False
    prev_blank = True
    for ln in lines:
        s = ln.strip()
        if not s:
            kinds.append(LineKind.BLANK)
            in_dialogue = False
            prev_blank = True
            continue

        if is_scene_heading(s):
            kind = LineKind.SCENE_HEADING
            in_dialogue = False
        elif in_dialogue:
            kind = LineKind.PARENTHETICAL if is_parenthetical(s) else LineKind.DIALOGUE
        elif is_page_number(s):
            kind = LineKind.PAGE_NUMBER
        elif is_continued_marker(s):
            kind = LineKind.CONTINUED_MARKER
        elif prev_blank and is_cue_shaped(s):
            kind = LineKind.CHARACTER_CUE
            in_dialogue = True
        else:
            kind = LineKind.ACTION
        kinds.append(kind)
        prev_blank = False
    return kinds


def count_line_kinds(lines: List[str]) -> Dict[str, int]:
    counts = Counter(k.value for k in classify_fountain_lines(lines))
    return {k.value: counts.get(k.value, 0) for k in LineKind}
