from __future__ import annotations

import os

import pytest

from hecto.fileio import load_file, save_file


def test_load_strips_line_endings(tmp_path, make_buffer):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"a\r\nb\n")
    buf = make_buffer([])
    buf.doc.dirty = 5

    assert load_file(buf, str(path)) == 2
    assert [r.chars for r in buf.rows] == ["a", "b"]
    assert buf.doc.dirty == 0


def test_save_flattens_rows(tmp_path, make_buffer):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"a\r\nb\n")
    buf = make_buffer([])
    load_file(buf, str(path))

    written = save_file(buf, str(path))
    assert path.read_bytes() == b"a\nb\n"
    assert written == 4
    assert buf.doc.statusmsg == "4 bytes written to disk"


def test_save_truncates_longer_file(tmp_path, make_buffer):
    path = tmp_path / "long.txt"
    path.write_bytes(b"x" * 100)
    buf = make_buffer(["short"])
    buf.doc.dirty = 3
    assert save_file(buf, str(path)) == 6
    assert path.read_bytes() == b"short\n"
    assert buf.doc.dirty == 0


def test_bytes_survive_a_round_trip(tmp_path, make_buffer):
    data = "café → ok\n".encode("utf-8") + b"\xff\xfe\n"
    src = tmp_path / "src.bin"
    src.write_bytes(data)
    buf = make_buffer([])
    load_file(buf, str(src))
    dst = tmp_path / "dst.bin"
    assert save_file(buf, str(dst)) == len(data)
    assert dst.read_bytes() == data


def test_missing_file_is_fatal(tmp_path, make_buffer):
    with pytest.raises(OSError, match="Opening file failed"):
        load_file(make_buffer([]), str(tmp_path / "nope.txt"))


def test_failed_save_keeps_dirty(tmp_path, make_buffer):
    buf = make_buffer(["a"])
    buf.doc.dirty = 2
    target = tmp_path / "missing-dir" / "out.txt"
    assert save_file(buf, str(target)) is None
    assert buf.doc.dirty == 2
    assert buf.doc.statusmsg.startswith("Can't save! I/O error:")
    assert not os.path.exists(target)
