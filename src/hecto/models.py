from __future__ import annotations

import time
from dataclasses import dataclass, field

from .constants import HECTO_TAB_STOP, HL_KEYWORD1, HL_KEYWORD2


@dataclass(frozen=True, slots=True)
class Keyword:
    text: str
    kind: int = HL_KEYWORD1


def keyword_table(primary: tuple[str, ...], secondary: tuple[str, ...] = ()) -> tuple[Keyword, ...]:
    """Tag plain keywords and type keywords with their highlight class."""
    return tuple(Keyword(k, HL_KEYWORD1) for k in primary) + tuple(
        Keyword(k, HL_KEYWORD2) for k in secondary
    )


@dataclass(slots=True)
class SyntaxDescriptor:
    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[Keyword, ...]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int


@dataclass(slots=True)
class Row:
    idx: int
    chars: str
    render: str = ""
    hl: list[int] = field(default_factory=list)
    open_comment: bool = False

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def cx_to_rx(self, cx: int, tab_stop: int = HECTO_TAB_STOP) -> int:
        rx = 0
        for ch in self.chars[:cx]:
            if ch == "\t":
                rx += (tab_stop - 1) - (rx % tab_stop)
            rx += 1
        return rx

    def rx_to_cx(self, rx: int, tab_stop: int = HECTO_TAB_STOP) -> int:
        cur_rx = 0
        for cx, ch in enumerate(self.chars):
            if ch == "\t":
                cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
            cur_rx += 1
            if cur_rx > rx:
                return cx
        return self.size


@dataclass(slots=True)
class Document:
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
    rows: list[Row] = field(default_factory=list)
    dirty: int = 0
    filename: str | None = None
    statusmsg: str = ""
    statusmsg_time: float = 0.0
    syntax: SyntaxDescriptor | None = None
    tab_stop: int = HECTO_TAB_STOP

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def current_row(self) -> Row | None:
        if 0 <= self.cy < self.numrows:
            return self.rows[self.cy]
        return None

    def set_status(self, fmt: str, *args: object) -> None:
        self.statusmsg = fmt % args if args else fmt
        self.statusmsg_time = time.time()
