from __future__ import annotations

from hecto.constants import (
    HL_COMMENT,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
)
from hecto.models import Document, Row
from hecto.syntax import (
    HLDB,
    find_syntax,
    highlight_row,
    is_separator,
    render_row,
    select_syntax_highlight,
)

C = HLDB[0]


def test_tabs_expand_to_the_next_stop():
    assert render_row("\tx") == " " * 8 + "x"
    assert render_row("ab\tc") == "ab" + " " * 6 + "c"
    assert render_row("a\tb", tab_stop=4) == "a   b"


def test_tab_only_rows_map_columns_both_ways():
    for count in range(1, 5):
        row = Row(idx=0, chars="\t" * count)
        row.render = render_row(row.chars)
        assert row.rsize == 8 * count
        for cx in range(count + 1):
            assert row.rx_to_cx(row.cx_to_rx(cx)) == cx


def test_separators():
    assert is_separator(" ")
    assert is_separator("")
    assert is_separator("\0")
    assert is_separator(";")
    assert is_separator("<")
    assert not is_separator("_")
    assert not is_separator("a")


def test_no_descriptor_means_plain_text():
    hl, open_comment = highlight_row("int x; /* y", False, None)
    assert hl == [HL_NORMAL] * len("int x; /* y")
    assert open_comment is False


def test_keyword_needs_separators_on_both_sides():
    hl, _ = highlight_row("intx", False, C)
    assert hl == [HL_NORMAL] * 4

    hl, _ = highlight_row("int x", False, C)
    assert hl[:3] == [HL_KEYWORD2] * 3
    assert hl[3:] == [HL_NORMAL] * 2

    hl, _ = highlight_row("xint", False, C)
    assert HL_KEYWORD2 not in hl


def test_keyword_classes():
    hl, _ = highlight_row("return;", False, C)
    assert hl[:6] == [HL_KEYWORD1] * 6
    assert hl[6] == HL_NORMAL


def test_single_line_comment_runs_to_end_of_row():
    text = "x = 1; // note"
    hl, open_comment = highlight_row(text, False, C)
    start = text.index("//")
    assert hl[start:] == [HL_COMMENT] * (len(text) - start)
    assert not open_comment


def test_comment_marker_inside_string_is_ignored():
    text = '"a // b" x'
    hl, _ = highlight_row(text, False, C)
    assert hl[:8] == [HL_STRING] * 8
    assert HL_COMMENT not in hl


def test_string_escapes():
    text = r'"a\"b" c'
    hl, _ = highlight_row(text, False, C)
    assert hl[:6] == [HL_STRING] * 6
    assert hl[6:] == [HL_NORMAL] * 2


def test_numbers():
    hl, _ = highlight_row("x = 3.14;", False, C)
    assert hl[4:8] == [HL_NUMBER] * 4
    hl, _ = highlight_row("x1", False, C)
    assert hl == [HL_NORMAL, HL_NORMAL]


def test_multiline_comment_state():
    hl, open_comment = highlight_row("a /* b", False, C)
    assert open_comment is True
    assert hl[2:] == [HL_MLCOMMENT] * 4

    hl, open_comment = highlight_row("still */ int", True, C)
    assert open_comment is False
    assert hl[:8] == [HL_MLCOMMENT] * 8
    assert hl[-3:] == [HL_KEYWORD2] * 3


def test_longest_keyword_wins():
    from hecto.models import SyntaxDescriptor, keyword_table

    syntax = SyntaxDescriptor(
        filetype="t",
        filematch=(),
        keywords=keyword_table(("for",), ("for.each",)),
        singleline_comment_start="",
        multiline_comment_start="",
        multiline_comment_end="",
        flags=0,
    )
    hl, _ = highlight_row("for.each x", False, syntax)
    assert hl[:8] == [HL_KEYWORD2] * 8


def test_find_syntax():
    assert find_syntax("main.c").filetype == "c"
    assert find_syntax("x.cpp").filetype == "c"
    assert find_syntax("tool.py").filetype == "python"
    assert find_syntax("notes.c.txt") is None
    assert find_syntax(None) is None


def test_select_syntax_rehighlights_all_rows(make_buffer):
    buf = make_buffer(["/* open", "int x;"])
    doc = buf.doc
    assert doc.rows[1].hl == [HL_NORMAL] * 6

    doc.filename = "prog.c"
    assert select_syntax_highlight(doc) is C
    assert doc.rows[0].open_comment
    assert doc.rows[1].hl == [HL_MLCOMMENT] * 6


def test_plain_document_has_no_open_comments():
    doc = Document()
    doc.filename = "readme.txt"
    assert select_syntax_highlight(doc) is None
