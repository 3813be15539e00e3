from __future__ import annotations

import errno
import fcntl
import os
import re
import struct
import termios
from contextlib import AbstractContextManager

from .constants import ANSI_CURSOR_FAR_CORNER, ANSI_CURSOR_QUERY
from .keys import KeyDecoder
from .log import get_logger

logger = get_logger(__name__)

CURSOR_REPLY_MAX = 31
_CURSOR_REPLY_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")


def _read_once(fd: int, n: int = 1) -> bytes:
    try:
        return os.read(fd, n)
    except InterruptedError:
        return b""


class KeyReader:
    """Reads keys from a raw-mode tty.

    The tty is configured with a short read timeout, so an empty read means
    no more bytes arrived in time; that is when a pending partial escape
    sequence is given up on.
    """

    def __init__(self, fd: int, decoder: KeyDecoder | None = None) -> None:
        self.fd = fd
        self.decoder = decoder or KeyDecoder()

    def read_key(self) -> int:
        while True:
            key = self.decoder.next_key()
            if key is not None:
                return key
            data = _read_once(self.fd, 1)
            if data:
                self.decoder.feed(data)
                continue
            if self.decoder.pending:
                key = self.decoder.next_key(final=True)
                if key is not None:
                    return key

    def read_until(self, terminator: bytes, limit: int) -> bytes:
        buf = bytearray(self.decoder.pending)
        self.decoder = KeyDecoder()
        while len(buf) < limit and not buf.endswith(terminator):
            data = _read_once(self.fd, 1)
            if not data:
                break
            buf.extend(data)
        return bytes(buf)


def get_cursor_position(reader: KeyReader, ofd: int) -> tuple[int, int] | None:
    if os.write(ofd, ANSI_CURSOR_QUERY.encode()) != len(ANSI_CURSOR_QUERY):
        return None
    reply = reader.read_until(b"R", CURSOR_REPLY_MAX)
    match = _CURSOR_REPLY_RE.match(reply)
    if not match:
        logger.warning("malformed cursor position reply %r", reply)
        return None
    return int(match.group(1)), int(match.group(2))


def get_window_size(reader: KeyReader, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        pass

    logger.info("TIOCGWINSZ unavailable, probing window size with the cursor")
    if os.write(ofd, ANSI_CURSOR_FAR_CORNER.encode()) != len(ANSI_CURSOR_FAR_CORNER):
        raise OSError(errno.EIO, "Unable to query screen size")
    pos = get_cursor_position(reader, ofd)
    if pos is None:
        raise OSError(errno.EIO, "Unable to query screen size")
    return pos


class RawMode(AbstractContextManager["RawMode"]):
    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._orig: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")

        self._orig = termios.tcgetattr(self.fd)
        raw = termios.tcgetattr(self.fd)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._orig is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._orig)
            self._orig = None
