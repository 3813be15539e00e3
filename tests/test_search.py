from __future__ import annotations

from hecto.constants import ARROW_DOWN, ARROW_LEFT, ARROW_UP, ENTER, ESC, HL_MATCH
from hecto.search import SearchEngine, SearchSnapshot


def test_forward_steps_wrap_around(make_buffer):
    buf = make_buffer(["foo", "bar foo", "baz"])
    search = SearchEngine(buf.doc)

    search.on_key("foo", ord("o"))
    assert search.last_match == 0
    assert (buf.doc.cy, buf.doc.cx) == (0, 0)

    search.on_key("foo", ARROW_DOWN)
    assert search.last_match == 1
    assert (buf.doc.cy, buf.doc.cx) == (1, 4)

    search.on_key("foo", ARROW_DOWN)
    assert search.last_match == 0


def test_reverse_direction(make_buffer):
    buf = make_buffer(["foo", "bar foo", "baz"])
    search = SearchEngine(buf.doc)
    search.on_key("foo", ord("o"))
    search.on_key("foo", ARROW_DOWN)
    assert search.last_match == 1

    search.on_key("foo", ARROW_UP)
    assert search.last_match == 0
    search.on_key("foo", ARROW_LEFT)
    assert search.last_match == 1


def test_typing_restarts_from_the_top(make_buffer):
    buf = make_buffer(["xa", "ab", "abc"])
    search = SearchEngine(buf.doc)
    search.on_key("a", ord("a"))
    search.on_key("a", ARROW_DOWN)
    assert search.last_match == 1
    search.on_key("ab", ord("b"))
    assert search.last_match == 1
    search.on_key("abc", ord("c"))
    assert search.last_match == 2


def test_match_overlay_is_restored(make_buffer):
    buf = make_buffer(["int foo;", "foo"], filename="a.c")
    row = buf.rows[0]
    original = row.hl.copy()

    search = SearchEngine(buf.doc)
    search.on_key("foo", ord("o"))
    assert row.hl[4:7] == [HL_MATCH] * 3
    assert row.hl[:4] == original[:4]

    search.on_key("foo", ARROW_DOWN)
    assert row.hl == original
    assert buf.rows[1].hl == [HL_MATCH] * 3

    search.on_key("foo", ENTER)
    assert buf.rows[1].hl != [HL_MATCH] * 3
    assert search.last_match is None


def test_enter_and_escape_do_not_search(make_buffer):
    buf = make_buffer(["foo"])
    search = SearchEngine(buf.doc)
    search.on_key("foo", ESC)
    assert search.last_match is None
    assert buf.doc.cy == 0


def test_match_column_is_in_character_space(make_buffer):
    buf = make_buffer(["\tneedle"])
    search = SearchEngine(buf.doc)
    search.on_key("needle", ord("e"))
    assert buf.doc.cx == 1


def test_no_match_leaves_cursor(make_buffer):
    buf = make_buffer(["abc"])
    buf.doc.cx = 2
    search = SearchEngine(buf.doc)
    search.on_key("zzz", ord("z"))
    assert search.last_match is None
    assert buf.doc.cx == 2


def test_empty_buffer(make_buffer):
    search = SearchEngine(make_buffer([]).doc)
    search.on_key("a", ord("a"))
    assert search.last_match is None


def test_snapshot_restores_cursor_and_scroll(make_buffer):
    doc = make_buffer(["a", "b"]).doc
    doc.cx, doc.cy, doc.rowoff, doc.coloff = 1, 1, 1, 0
    saved = SearchSnapshot.capture(doc)
    doc.cx, doc.cy, doc.rowoff, doc.coloff = 0, 0, 2, 3
    saved.restore(doc)
    assert (doc.cx, doc.cy, doc.rowoff, doc.coloff) == (1, 1, 1, 0)
