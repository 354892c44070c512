import json

from pdf2fountain.pipeline.fountain_import import (
    clean_pdf_text_for_fountain,
    import_pdf_as_fountain,
    reconstruct_lines,
    run_pdf_to_fountain,
)
from tests.pdf_fakes import failing_opener, fake_opener, page_from_lines

MESSY = [
    "THE BIG SCRIPT",
    "Written by",
    "JANE DOE",
    "",
    "FADE IN:",
    "INT.",
    "/EXT. KITCHEN - DAY",
    "John   enters, soaking wet.",
    "2.",
    "(CONTINUED)",
    "JOHN",
    "",
    "(shivering)",
    "I walked all",
    "the way home.",
    "",
    "",
    "",
    "",
    "MARY",
    "You what?",
    "She hands him a towel.",
    "EXT. STREET - NIGHT",
]


def _fake_screenplay_pdf():
    return fake_opener(
        page_from_lines(["THE BIG SCRIPT", "Written by", "JANE DOE"]),
        page_from_lines(["INT. KITCHEN - DAY", "John enters.", "2."]),
        page_from_lines(["JOHN", "I'm home,", "honey."]),
    )


def test_split_heading_example():
    assert "INT./EXT. KITCHEN - DAY" in reconstruct_lines(["INT.", "/EXT. KITCHEN - DAY"])


def test_dialogue_example():
    lines = ["JOHN", "", "Hello", "there.", "", "", "MARY", "", "Hi John."]
    assert reconstruct_lines(lines) == ["JOHN", "Hello there.", "", "MARY", "Hi John."]


def test_page_number_example():
    assert reconstruct_lines(["EXT. PARK - DAY", "42.", "John walks."]) == [
        "EXT. PARK - DAY",
        "",
        "John walks.",
    ]


def test_parenthetical_example():
    assert reconstruct_lines(["JOHN", "", "(whispering)", "Be quiet."]) == [
        "JOHN",
        "(whispering)",
        "Be quiet.",
    ]


def test_title_page_removed_but_same_lines_kept_after_first_scene():
    lines = ["WRITTEN BY", "JANE DOE", "2024", "", "INT. HOUSE - DAY", "WRITTEN BY", "JANE DOE", "2024"]
    assert reconstruct_lines(lines) == ["INT. HOUSE - DAY", "WRITTEN BY", "JANE DOE", "2024"]


def test_messy_page_reconstruction():
    assert reconstruct_lines(MESSY) == [
        "INT./EXT. KITCHEN - DAY",
        "John enters, soaking wet.",
        "",
        "",
        "JOHN",
        "(shivering)",
        "I walked all the way home.",
        "",
        "",
        "MARY",
        "You what?",
        "She hands him a towel.",
        "EXT. STREET - NIGHT",
    ]


def test_output_never_longer_than_input():
    samples = [
        MESSY,
        ["JOHN", "Hello.", "INT. KITCHEN - DAY"],
        ["JOHN", "Hi", "He leaves the room in a hurry, slamming the door."],
        ["", "A", "", "B", "", "C"],
    ]
    for lines in samples:
        assert len(reconstruct_lines(lines)) <= len(lines)


def test_reconstruction_is_a_fixed_point_on_examples():
    for lines in (
        ["JOHN", "", "Hello", "there.", "", "", "MARY", "", "Hi John."],
        ["JOHN", "", "(whispering)", "Be quiet."],
        ["INT.", "/EXT. KITCHEN - DAY"],
    ):
        once = reconstruct_lines(lines)
        assert reconstruct_lines(once) == once


def test_two_blanks_after_dialogue_shrink_to_one_on_second_pass():
    once = reconstruct_lines(MESSY)
    twice = reconstruct_lines(once)
    assert once[6:9] == ["I walked all the way home.", "", ""]
    assert twice == once[:8] + once[9:]
    assert reconstruct_lines(twice) == twice


def test_fountain_spacing_is_off_by_default():
    lines = ["JOHN", "Hi.", "She leaves the room."]
    assert reconstruct_lines(lines) == lines


def test_fountain_spacing_separates_action_from_dialogue():
    lines = ["JOHN", "Hi.", "She leaves the room."]
    assert reconstruct_lines(lines, fountain_spacing=True) == [
        "JOHN",
        "Hi.",
        "",
        "She leaves the room.",
    ]


def test_fountain_spacing_on_messy_page():
    out = reconstruct_lines(MESSY, fountain_spacing=True)
    assert out[:2] == ["INT./EXT. KITCHEN - DAY", ""]
    assert out[-3:] == ["She hands him a towel.", "", "EXT. STREET - NIGHT"]


def test_clean_text_with_fountain_spacing():
    raw = "INT. HOUSE - DAY\nJOHN\nHi."
    assert clean_pdf_text_for_fountain(raw, fountain_spacing=True) == "INT. HOUSE - DAY\n\nJOHN\nHi."


def test_clean_text_repairs_encoding_and_line_endings():
    raw = "INT. HOUSE - DAY\r\n\r\nJOHN\r\nI donâ€™t know."
    assert clean_pdf_text_for_fountain(raw) == "INT. HOUSE - DAY\n\nJOHN\nI don't know."


def test_clean_text_encoding_repair_can_be_disabled():
    assert "â€™" in clean_pdf_text_for_fountain("donâ€™t", fix_encoding=False)


def test_import_pdf_as_fountain():
    result = import_pdf_as_fountain("dummy.pdf", pdf_open=_fake_screenplay_pdf())
    assert result.success
    assert result.page_count == 3
    assert result.error is None
    assert result.text.split("\n") == [
        "INT. KITCHEN - DAY",
        "John enters.",
        "",
        "",
        "JOHN",
        "I'm home, honey.",
    ]


def test_import_pdf_failure_is_reported_not_raised():
    result = import_pdf_as_fountain(b"garbage", pdf_open=failing_opener(ValueError("bad xref")))
    assert not result.success
    assert result.error == "bad xref"
    assert result.text == ""


def test_run_pdf_to_fountain_writes_outputs(tmp_path):
    out = tmp_path / "out" / "script.fountain"
    json_out = tmp_path / "out" / "script.json"
    result = run_pdf_to_fountain(
        pdf="dummy.pdf",
        out=str(out),
        json_out=str(json_out),
        pdf_open=_fake_screenplay_pdf(),
    )
    assert result.success
    assert out.read_text(encoding="utf-8") == result.text + "\n"
    dumped = json.loads(json_out.read_text(encoding="utf-8"))
    assert dumped["page_count"] == 3
    assert dumped["success"] is True


def test_run_pdf_to_fountain_raw_mode_keeps_noise(tmp_path):
    out = tmp_path / "raw.txt"
    run_pdf_to_fountain(pdf="dummy.pdf", out=str(out), raw=True, pdf_open=_fake_screenplay_pdf())
    text = out.read_text(encoding="utf-8")
    assert "Written by" in text
    assert "2." in text.split("\n")


def test_run_pdf_to_fountain_failure_writes_no_fountain(tmp_path):
    out = tmp_path / "script.fountain"
    json_out = tmp_path / "script.json"
    result = run_pdf_to_fountain(
        pdf="broken.pdf",
        out=str(out),
        json_out=str(json_out),
        pdf_open=failing_opener(OSError("cannot open")),
    )
    assert not result.success
    assert not out.exists()
    assert json.loads(json_out.read_text(encoding="utf-8"))["error"] == "cannot open"
