"""Raw terminal bytes to logical keys.

Any byte other than ESC is a key by itself. ESC starts one of::

    ESC [ <digit> ~     home, delete, end, page up/down
    ESC [ <letter>      arrows, home, end
    ESC O <letter>      home, end

A CSI sequence (``ESC [``) runs through any parameter and intermediate
bytes up to its final byte, so ``ESC [ 1 5 ~`` (F5) or ``ESC [ 1 ; 5 C``
(ctrl-right) is consumed whole. Sequences not listed above decode to ESC.

The parser never blocks. When the buffered bytes are a proper prefix of a
sequence it reports that more input is needed; the caller decides, after
its read times out, that the sequence is over and asks again with
``final=True``, which turns the prefix into a literal ESC.
"""

from __future__ import annotations

from .constants import CSI_LETTER_MAP, CSI_TILDE_MAP, ESC, SS3_LETTER_MAP
from .log import get_logger

logger = get_logger(__name__)

_CSI = ord("[")
_SS3 = ord("O")
_TILDE = ord("~")


def _incomplete(buf: bytes, final: bool) -> tuple[int | None, int]:
    if final:
        logger.debug("incomplete escape sequence %r read as ESC", bytes(buf))
        return ESC, len(buf)
    return None, 0


def _is_csi_body(byte: int) -> bool:
    # Parameter bytes 0x30-0x3F and intermediate bytes 0x20-0x2F.
    return 0x20 <= byte <= 0x3F


def _is_csi_final(byte: int) -> bool:
    return 0x40 <= byte <= 0x7E


def _decode_csi(buf: bytes, final: bool) -> tuple[int | None, int]:
    end = 2
    while end < len(buf) and _is_csi_body(buf[end]):
        end += 1
    if end == len(buf):
        return _incomplete(buf, final)
    if not _is_csi_final(buf[end]):
        logger.debug("malformed escape sequence %r", bytes(buf[: end + 1]))
        return ESC, end

    params = bytes(buf[2:end])
    terminator = buf[end]
    consumed = end + 1
    if not params:
        key = CSI_LETTER_MAP.get(terminator, ESC)
    elif terminator == _TILDE and len(params) == 1:
        key = CSI_TILDE_MAP.get(params[0], ESC)
    else:
        key = ESC
    if key == ESC:
        logger.debug("unrecognized escape sequence %r", bytes(buf[:consumed]))
    return key, consumed


def decode_key(buf: bytes, final: bool = False) -> tuple[int | None, int]:
    """Decode the first key in ``buf``.

    Returns ``(key, consumed)``. ``key`` is ``None`` (and ``consumed`` 0)
    when ``buf`` is empty or holds only the start of an escape sequence.
    """
    if not buf:
        return None, 0
    if buf[0] != ESC:
        return buf[0], 1
    if len(buf) < 2:
        return _incomplete(buf, final)

    kind = buf[1]
    if kind == _CSI:
        return _decode_csi(buf, final)
    if kind != _SS3:
        return ESC, 1
    if len(buf) < 3:
        return _incomplete(buf, final)
    return SS3_LETTER_MAP.get(buf[2], ESC), 3


class KeyDecoder:
    """Buffers input bytes and hands out one key at a time."""

    def __init__(self) -> None:
        self._pending = bytearray()

    @property
    def pending(self) -> bytes:
        return bytes(self._pending)

    def feed(self, data: bytes) -> None:
        self._pending.extend(data)

    def next_key(self, final: bool = False) -> int | None:
        key, consumed = decode_key(self._pending, final)
        if consumed:
            del self._pending[:consumed]
        return key

    def decode_all(self, final: bool = True) -> list[int]:
        keys: list[int] = []
        while self._pending:
            key = self.next_key(final)
            if key is None:
                break
            keys.append(key)
        return keys
