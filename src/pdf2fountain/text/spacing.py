"""
spacing.py

Optional pass that inserts the blank lines Fountain needs between elements.

Fountain decides what a line is from the blank lines around it: a character
cue must follow a blank line, dialogue runs until the next blank line, and a
scene heading stands alone. Reconstructed PDF text does not always have those
blanks, e.g. a one-line speech directly followed by action:

    JOHN
    Hi.
    She leaves the room.     <- read as JOHN's dialogue

enforce_fountain_spacing() inserts a blank line:

    - before a scene heading or transition that follows a non-blank line
    - after a scene heading
    - before a character cue
    - before an action line that directly follows dialogue

This pass adds lines, so it is off by default in the import pipeline.
"""
from __future__ import annotations

import re
from typing import List, Optional

from pdf2fountain.text.headings import is_scene_heading
from pdf2fountain.text.line_kinds import (
    LineKind,
    is_all_caps,
    is_cue_shaped,
    is_parenthetical,
    looks_like_action,
)

CUE_MAX_WORDS = 4

# CUT TO: / SMASH CUT TO: / DISSOLVE TO:
_TRANSITION_RE = re.compile(r"TO:$")


def is_transition(line: str) -> bool:
    s = line.strip()
    return is_all_caps(s) and bool(_TRANSITION_RE.search(s))


def _has_content_after(lines: List[str], i: int) -> bool:
    return any(ln.strip() for ln in lines[i + 1:])


def enforce_fountain_spacing(lines: List[str]) -> List[str]:
    """
    Insert the blank lines Fountain needs around headings, cues and dialogue.

    Existing lines are never changed or removed, and no blank is added next
    to an existing blank. Running it twice gives the same result.
    """
    out: List[str] = []
    in_dialogue = False
    prev_kind: Optional[LineKind] = None

    for i, ln in enumerate(lines):
        s = ln.strip()
        if not s:
            out.append(ln)
            in_dialogue = False
            continue

        transition = False
        if is_scene_heading(s):
            kind = LineKind.SCENE_HEADING
            in_dialogue = False
        elif in_dialogue:
            if is_parenthetical(s):
                kind = LineKind.PARENTHETICAL
            elif prev_kind == LineKind.DIALOGUE and looks_like_action(s):
                kind = LineKind.ACTION
                in_dialogue = False
            else:
                kind = LineKind.DIALOGUE
        elif is_transition(s):
            kind = LineKind.ACTION
            transition = True
        elif (
            is_cue_shaped(s)
            and len(s.split()) <= CUE_MAX_WORDS
            and _has_content_after(lines, i)
        ):
            kind = LineKind.CHARACTER_CUE
            in_dialogue = True
        else:
            kind = LineKind.ACTION

        needs_blank = (
            kind in (LineKind.SCENE_HEADING, LineKind.CHARACTER_CUE)
            or transition
            or prev_kind == LineKind.SCENE_HEADING
            or (kind == LineKind.ACTION and prev_kind == LineKind.DIALOGUE)
        )
        if needs_blank and out and out[-1].strip():
            out.append("")

        out.append(ln)
        prev_kind = kind

    return out
