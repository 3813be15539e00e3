from __future__ import annotations

import errno
import os

from .buffer import TextBuffer
from .constants import ENCODING
from .log import get_logger

logger = get_logger(__name__)


def load_file(buf: TextBuffer, filename: str) -> int:
    """Append one row per line of ``filename``. Returns the number of rows read.

    Raises ``OSError`` if the file cannot be read.
    """
    count = 0
    try:
        with open(filename, "rb") as f:
            for line in f:
                buf.insert_row(buf.doc.numrows, line.rstrip(b"\r\n").decode(ENCODING))
                count += 1
    except OSError as exc:
        logger.error("opening %s failed: %s", filename, exc)
        raise OSError(exc.errno, f"Opening file failed: {filename}") from exc
    buf.doc.dirty = 0
    logger.info("loaded %d rows from %s", count, filename)
    return count


def write_file(filename: str, data: bytes) -> None:
    fd = os.open(filename, os.O_RDWR | os.O_CREAT, 0o644)
    try:
        os.ftruncate(fd, len(data))
        written = 0
        while written < len(data):
            n = os.write(fd, data[written:])
            if n <= 0:
                raise OSError(errno.EIO, "short write")
            written += n
    finally:
        os.close(fd)


def save_file(buf: TextBuffer, filename: str) -> int | None:
    """Overwrite ``filename`` with the buffer contents.

    Returns the number of bytes written, or ``None`` on failure. Either way
    a status message is set; ``dirty`` is only cleared on success.
    """
    doc = buf.doc
    text, _ = buf.to_text()
    data = text.encode(ENCODING, errors="replace")
    try:
        write_file(filename, data)
    except OSError as exc:
        logger.warning("saving %s failed: %s", filename, exc)
        doc.set_status("Can't save! I/O error: %s", os.strerror(exc.errno or errno.EIO))
        return None
    doc.dirty = 0
    doc.set_status("%d bytes written to disk", len(data))
    logger.info("wrote %d bytes to %s", len(data), filename)
    return len(data)
