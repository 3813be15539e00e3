from __future__ import annotations

import os
import time

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_ON,
    ANSI_RESET,
    ANSI_SHOW_CURSOR,
    ENCODING,
    HECTO_STATUS_TIMEOUT,
    HECTO_VERSION,
    HL_NORMAL,
)
from .models import Document, Row
from .syntax import syntax_to_color


def is_control(ch: str) -> bool:
    code = ord(ch)
    return code < 32 or code == 127


def control_symbol(ch: str) -> str:
    code = ord(ch)
    return chr(ord("@") + code) if code <= 26 else "?"


def scroll(doc: Document) -> None:
    doc.rx = 0
    row = doc.current_row()
    if row is not None:
        doc.rx = row.cx_to_rx(doc.cx, doc.tab_stop)

    if doc.cy < doc.rowoff:
        doc.rowoff = doc.cy
    if doc.cy >= doc.rowoff + doc.screenrows:
        doc.rowoff = doc.cy - doc.screenrows + 1
    if doc.rx < doc.coloff:
        doc.coloff = doc.rx
    if doc.rx >= doc.coloff + doc.screencols:
        doc.coloff = doc.rx - doc.screencols + 1


def draw_welcome(doc: Document, out: list[str]) -> None:
    welcome = f"Hecto editor -- version {HECTO_VERSION}"[: doc.screencols]
    padding = (doc.screencols - len(welcome)) // 2
    if padding:
        out.append("~")
        padding -= 1
    out.append(" " * padding)
    out.append(welcome)


def draw_row(row: Row, coloff: int, width: int, out: list[str]) -> None:
    text = row.render[coloff : coloff + width]
    hl = row.hl[coloff : coloff + width]
    current_color = -1
    for ch, h in zip(text, hl):
        if is_control(ch):
            out.append(ANSI_INVERT_ON)
            out.append(control_symbol(ch))
            out.append(ANSI_RESET)
            if current_color != -1:
                out.append(f"\x1b[{current_color}m")
        elif h == HL_NORMAL:
            if current_color != -1:
                out.append(ANSI_DEFAULT_FG)
                current_color = -1
            out.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                out.append(f"\x1b[{color}m")
                current_color = color
            out.append(ch)
    out.append(ANSI_DEFAULT_FG)


def draw_rows(doc: Document, out: list[str]) -> None:
    for y in range(doc.screenrows):
        filerow = doc.rowoff + y
        if filerow < doc.numrows:
            draw_row(doc.rows[filerow], doc.coloff, doc.screencols, out)
        elif doc.numrows == 0 and y == doc.screenrows // 3:
            draw_welcome(doc, out)
        else:
            out.append("~")
        out.append(ANSI_CLEAR_LINE)
        out.append("\r\n")


def display_filename(filename: str | None) -> str:
    """``filename`` as frame text: its filesystem bytes, one character per byte."""
    if not filename:
        return "[No Name]"
    return os.fsencode(filename).decode(ENCODING)


def draw_status_bar(doc: Document, out: list[str]) -> None:
    filename = display_filename(doc.filename)
    status = f"{filename:.20} - {doc.numrows} lines {'(modified)' if doc.dirty else ''}"
    filetype = doc.syntax.filetype if doc.syntax else "no ft"
    rstatus = f"{filetype} | {doc.cy + 1}/{doc.numrows}"
    status = status[: doc.screencols]
    out.append(ANSI_INVERT_ON)
    out.append(status)
    fill = len(status)
    while fill < doc.screencols:
        if doc.screencols - fill == len(rstatus):
            out.append(rstatus)
            break
        out.append(" ")
        fill += 1
    out.append(ANSI_RESET)
    out.append("\r\n")


def draw_message_bar(
    doc: Document, out: list[str], timeout: float = HECTO_STATUS_TIMEOUT, now: float | None = None
) -> None:
    out.append(ANSI_CLEAR_LINE)
    now = time.time() if now is None else now
    if doc.statusmsg and now - doc.statusmsg_time < timeout:
        out.append(doc.statusmsg[: doc.screencols])


def cursor_escape(doc: Document) -> str:
    return f"\x1b[{doc.cy - doc.rowoff + 1};{doc.rx - doc.coloff + 1}H"


def compose_frame(
    doc: Document, timeout: float = HECTO_STATUS_TIMEOUT, now: float | None = None
) -> str:
    scroll(doc)
    out: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
    draw_rows(doc, out)
    draw_status_bar(doc, out)
    draw_message_bar(doc, out, timeout, now)
    out.append(cursor_escape(doc))
    out.append(ANSI_SHOW_CURSOR)
    return "".join(out)


def refresh_screen(doc: Document, fd: int, timeout: float = HECTO_STATUS_TIMEOUT) -> None:
    os.write(fd, compose_frame(doc, timeout).encode(ENCODING, errors="replace"))
