import pytest

from pdf2fountain.text.line_kinds import (
    LineKind,
    classify_fountain_lines,
    count_line_kinds,
    is_cue_shaped,
    is_parenthetical,
    looks_like_action,
)


def test_classify_fountain_lines():
    lines = [
        "INT. HOUSE - DAY",
        "",
        "JOHN",
        "(quietly)",
        "Hello.",
        "",
        "He leaves.",
        "12",
    ]
    assert classify_fountain_lines(lines) == [
        LineKind.SCENE_HEADING,
        LineKind.BLANK,
        LineKind.CHARACTER_CUE,
        LineKind.PARENTHETICAL,
        LineKind.DIALOGUE,
        LineKind.BLANK,
        LineKind.ACTION,
        LineKind.PAGE_NUMBER,
    ]


def test_caps_line_without_blank_before_is_action():
    assert classify_fountain_lines(["He stops.", "BANG"]) == [LineKind.ACTION, LineKind.ACTION]


def test_count_line_kinds_lists_every_kind():
    counts = count_line_kinds(["JOHN", "Hi."])
    assert set(counts) == {k.value for k in LineKind}
    assert counts["character_cue"] == 1
    assert counts["dialogue"] == 1
    assert counts["action"] == 0


@pytest.mark.parametrize(
    "line,expected",
    [("JOHN", True), ("JOHN (V.O.)", True), ("J", False), ("John", False), ("INT. HOUSE", False)],
)
def test_is_cue_shaped(line, expected):
    assert is_cue_shaped(line) is expected


def test_cue_length_limit():
    assert is_cue_shaped("A" * 50)
    assert not is_cue_shaped("A" * 51)


def test_is_parenthetical():
    assert is_parenthetical("(beat)")
    assert is_parenthetical("  (O.S.)  ")
    assert not is_parenthetical("(beat) then")
    assert not is_parenthetical("(a) (b)")


@pytest.mark.parametrize(
    "line,expected",
    [
        ("She runs.", True),
        ("It's raining.", True),
        ("A dog barks.", True),
        ("Hello there.", False),
        ("Anyway, I said no.", False),
        ("THE END", False),
        ("x" * 46, True),
        ("x" * 45, False),
    ],
)
def test_looks_like_action(line, expected):
    assert looks_like_action(line) is expected
