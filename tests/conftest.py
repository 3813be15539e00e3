from __future__ import annotations

import errno
import os

import pytest

from hecto import terminal
from hecto.buffer import TextBuffer
from hecto.models import Document
from hecto.syntax import find_syntax


def build_buffer(lines: list[str], filename: str | None = None) -> TextBuffer:
    doc = Document(screenrows=10, screencols=40, filename=filename)
    doc.syntax = find_syntax(filename)
    buf = TextBuffer(doc)
    for line in lines:
        buf.insert_row(doc.numrows, line)
    doc.dirty = 0
    return buf


@pytest.fixture
def make_buffer():
    return build_buffer


@pytest.fixture
def tty_input():
    """Read end of a pipe preloaded with ``data``; reads past it return b""."""
    fds: list[int] = []

    def make(data: bytes) -> int:
        r, w = os.pipe()
        fds.append(r)
        os.write(w, data)
        os.close(w)
        return r

    yield make
    for fd in fds:
        os.close(fd)


@pytest.fixture
def tty_output():
    r, w = os.pipe()
    yield r, w
    os.close(r)
    os.close(w)


@pytest.fixture
def no_winsize(monkeypatch):
    def ioctl(*_args):
        raise OSError(errno.ENOTTY, "Inappropriate ioctl for device")

    monkeypatch.setattr(terminal.fcntl, "ioctl", ioctl)
