"""
dialogue.py

Re-joins dialogue that PDF layout extraction hard-wrapped across lines.

Fountain treats dialogue as continuing until a real blank line. Layout-driven
extraction, however, breaks every dialogue paragraph at the printed column
width and often inserts a spurious single blank line mid-paragraph. This
module walks the line sequence with a two-state machine:

    SCANNING     lines pass through unchanged until a character cue shows up
    IN_DIALOGUE  following lines are accumulated into one dialogue line until
                 a real stop condition

Stop conditions inside a dialogue block, checked in this order:

    1) second consecutive blank line          -> close block (line consumed)
    2) scene heading                          -> close block, reprocess line
    3) all-caps line after a blank            -> next cue, reprocess line
    4) (parenthetical)                        -> emitted on its own, stay
    5) action-looking line after some text    -> close block, reprocess line

Anything else is a dialogue continuation. A closed block is followed by one
separating blank line, unless the block absorbed nothing (a single dialogue
line with no swallowed blank), in which case the input had no blank there
either and the line count must not grow (see DialogueMerger._close).
"""
from __future__ import annotations

from enum import Enum
from typing import List

from pdf2fountain.text.headings import is_scene_heading
from pdf2fountain.text.line_kinds import (
    is_blank,
    is_cue_shaped,
    is_parenthetical,
    looks_like_action,
)


class DialogueState(str, Enum):
    SCANNING = "scanning"
    IN_DIALOGUE = "in_dialogue"


class DialogueMerger:
    """
    Single-use state machine; call merge() once per line sequence.

    Fields:
        state: Current DialogueState.
        out: Emitted lines.
        accumulator: Stripped dialogue fragments waiting to be joined.
        consecutive_blank_lines: Blank lines seen since the last content line
            of the current block.
        absorbed: Input lines consumed in the current block minus lines
            emitted for it. Positive means a separator blank fits.
    """

    def __init__(self) -> None:
        self.state = DialogueState.SCANNING
        self.out: List[str] = []
        self.accumulator: List[str] = []
        self.consecutive_blank_lines = 0
        self.absorbed = 0

    def merge(self, lines: List[str]) -> List[str]:
        i = 0
        while i < len(lines):
            if self.step(lines[i]):
                i += 1
        self.finish()
        return self.out

    def step(self, line: str) -> bool:
        """Process one line; return False when it must be fed again."""
        if self.state is DialogueState.SCANNING:
            return self._scan(line)
        return self._in_dialogue(line)

    def finish(self) -> None:
        if self.state is DialogueState.IN_DIALOGUE:
            self._flush()
            self.state = DialogueState.SCANNING

    def _preceded_by_blank(self) -> bool:
        return not self.out or is_blank(self.out[-1])

    def _scan(self, line: str) -> bool:
        if is_cue_shaped(line) and self._preceded_by_blank():
            self.state = DialogueState.IN_DIALOGUE
            self.accumulator = []
            self.consecutive_blank_lines = 0
            self.absorbed = 0
        self.out.append(line)
        return True

    def _in_dialogue(self, line: str) -> bool:
        s = line.strip()

        if not s:
            self.consecutive_blank_lines += 1
            self.absorbed += 1
            if self.consecutive_blank_lines >= 2:
                self._close()
            return True

        if is_scene_heading(s):
            self._close()
            return False

        if (
            is_cue_shaped(s)
            and not s.startswith("(")
            and self.consecutive_blank_lines > 0
        ):
            self._close()
            return False

        if is_parenthetical(s):
            self.absorbed += 1
            self._flush()
            self._emit(line)
            self.consecutive_blank_lines = 0
            return True

        if self.accumulator and looks_like_action(s):
            self._close()
            return False

        self.absorbed += 1
        self.accumulator.append(s)
        self.consecutive_blank_lines = 0
        return True

    def _emit(self, line: str) -> None:
        self.out.append(line)
        self.absorbed -= 1

    def _flush(self) -> None:
        if self.accumulator:
            self._emit(" ".join(self.accumulator))
            self.accumulator = []

    def _close(self) -> None:
        """
        Flush the block and leave IN_DIALOGUE.

        The separator blank is only written when the block absorbed input
        lines. A one-line speech directly followed by action or a heading
        therefore stays attached to it, and a Fountain reader takes that next
        line as more dialogue. reconstruct_lines(fountain_spacing=True) runs
        enforce_fountain_spacing() afterwards to insert the missing blank.
        """
        self._flush()
        if self.absorbed > 0:
            self._emit("")
        self.state = DialogueState.SCANNING


def merge_dialogue_blocks(lines: List[str]) -> List[str]:
    """
    Merge hard-wrapped dialogue lines following each character cue.

    Args:
        lines: Lines after heading repair.

    Returns:
        A new list, never longer than the input.
    """
    return DialogueMerger().merge(lines)
