from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable
from typing import Final, Protocol

from .buffer import TextBuffer
from .config import EditorOptions
from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
)
from .fileio import load_file, save_file
from .log import configure_logging, get_logger
from .models import Document
from .search import SearchEngine, SearchSnapshot
from .syntax import select_syntax_highlight
from .terminal import KeyReader, RawMode, get_window_size
from .ui import refresh_screen, scroll

logger = get_logger(__name__)

STDIN_FD: Final[int] = 0
STDOUT_FD: Final[int] = 1

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
SEARCH_PROMPT = "Search: %s (Use ESC/Arrows/Enter)"
SAVE_AS_PROMPT = "Save as: %s (ESC to cancel)"

PromptCallback = Callable[[str, int], None]


class KeySource(Protocol):
    def read_key(self) -> int: ...


class Editor:
    """One editing session: a single document, its cursor, and the terminal it draws on."""

    def __init__(
        self,
        options: EditorOptions | None = None,
        keys: KeySource | None = None,
        out_fd: int | None = None,
    ) -> None:
        self.options = options or EditorOptions()
        self.doc = Document(tab_stop=self.options.tab_stop)
        self.buffer = TextBuffer(self.doc)
        self.search = SearchEngine(self.doc)
        self.keys = keys
        self.out_fd = out_fd
        self.quit_times = self.options.quit_times

    def update_window_size(self) -> None:
        if not isinstance(self.keys, KeyReader) or self.out_fd is None:
            return
        rows, cols = get_window_size(self.keys, self.out_fd)
        self.doc.screenrows = max(1, rows - 2)
        self.doc.screencols = max(1, cols)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        # Only the startup query is fatal; a failed resize keeps the old size.
        try:
            self.update_window_size()
        except OSError as exc:
            logger.warning("window size query after resize failed: %s", exc)
            self.set_status_message("Unable to query screen size")
        self.refresh_screen()

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.doc.set_status(fmt, *args)

    def refresh_screen(self) -> None:
        if self.out_fd is None:
            scroll(self.doc)
            return
        refresh_screen(self.doc, self.out_fd, self.options.status_timeout)

    def read_key(self) -> int:
        if self.keys is None:
            raise OSError("no key source")
        return self.keys.read_key()

    # File operations.

    def open(self, filename: str) -> None:
        self.doc.filename = filename
        select_syntax_highlight(self.doc)
        load_file(self.buffer, filename)

    def save(self) -> int | None:
        if self.doc.filename is None:
            filename = self.prompt(SAVE_AS_PROMPT)
            if filename is None:
                self.set_status_message("Save aborted")
                return None
            self.doc.filename = filename
            select_syntax_highlight(self.doc)
        return save_file(self.buffer, self.doc.filename)

    # Prompt and search.

    def prompt(self, fmt: str, callback: PromptCallback | None = None) -> str | None:
        """Collect a line in the message bar. Returns ``None`` if cancelled with ESC."""
        buf = ""
        while True:
            self.set_status_message(fmt, buf)
            self.refresh_screen()

            c = self.read_key()
            if c in (DEL_KEY, CTRL_H, BACKSPACE):
                buf = buf[:-1]
            elif c == ESC:
                self.set_status_message("")
                if callback:
                    callback(buf, c)
                return None
            elif c == ENTER:
                if buf:
                    self.set_status_message("")
                    if callback:
                        callback(buf, c)
                    return buf
            elif 32 <= c < 127:
                buf += chr(c)

            if callback:
                callback(buf, c)

    def find(self) -> None:
        saved = SearchSnapshot.capture(self.doc)
        query = self.prompt(SEARCH_PROMPT, self.search.on_key)
        self.search.reset()
        if query is None:
            saved.restore(self.doc)

    # Editing at the cursor.

    def insert_char(self, c: int) -> None:
        doc = self.doc
        if doc.cy == doc.numrows:
            self.buffer.insert_row(doc.numrows, "")
        self.buffer.insert_char(doc.rows[doc.cy], doc.cx, chr(c))
        doc.cx += 1

    def insert_newline(self) -> None:
        self.buffer.split_row(self.doc.cy, self.doc.cx)
        self.doc.cy += 1
        self.doc.cx = 0

    def del_char(self) -> None:
        doc = self.doc
        if doc.cy == doc.numrows or (doc.cx == 0 and doc.cy == 0):
            return
        if doc.cx > 0:
            self.buffer.delete_char(doc.rows[doc.cy], doc.cx - 1)
            doc.cx -= 1
            return
        join_at = self.buffer.join_row(doc.cy - 1)
        if join_at is not None:
            doc.cy -= 1
            doc.cx = join_at

    def move_cursor(self, key: int) -> None:
        doc = self.doc
        row = doc.current_row()

        if key == ARROW_LEFT:
            if doc.cx != 0:
                doc.cx -= 1
            elif doc.cy > 0:
                doc.cy -= 1
                doc.cx = doc.rows[doc.cy].size
        elif key == ARROW_RIGHT:
            if row is not None and doc.cx < row.size:
                doc.cx += 1
            elif row is not None and doc.cx == row.size:
                doc.cy += 1
                doc.cx = 0
        elif key == ARROW_UP:
            if doc.cy != 0:
                doc.cy -= 1
        elif key == ARROW_DOWN:
            if doc.cy < doc.numrows:
                doc.cy += 1

        row = doc.current_row()
        rowlen = row.size if row is not None else 0
        if doc.cx > rowlen:
            doc.cx = rowlen

    def page(self, key: int) -> None:
        doc = self.doc
        if key == PAGE_UP:
            doc.cy = doc.rowoff
        else:
            doc.cy = min(doc.rowoff + doc.screenrows - 1, doc.numrows)
        for _ in range(doc.screenrows):
            self.move_cursor(ARROW_UP if key == PAGE_UP else ARROW_DOWN)

    # Dispatch.

    def confirm_quit(self) -> bool:
        if self.doc.dirty and self.quit_times > 0:
            self.set_status_message(
                "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                self.quit_times,
            )
            self.quit_times -= 1
            return False
        return True

    def handle_key(self, c: int) -> bool:
        """Apply one key. Returns ``False`` once the session should end."""
        if c == CTRL_Q:
            return not self.confirm_quit()

        if c == ENTER:
            self.insert_newline()
        elif c == CTRL_S:
            self.save()
        elif c == HOME_KEY:
            self.doc.cx = 0
        elif c == END_KEY:
            row = self.doc.current_row()
            if row is not None:
                self.doc.cx = row.size
        elif c == CTRL_F:
            self.find()
        elif c in (BACKSPACE, CTRL_H, DEL_KEY):
            if c == DEL_KEY:
                self.move_cursor(ARROW_RIGHT)
            self.del_char()
        elif c in (PAGE_UP, PAGE_DOWN):
            self.page(c)
        elif c in (ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT):
            self.move_cursor(c)
        elif c in (CTRL_L, ESC):
            pass
        elif c < 256:
            self.insert_char(c)

        self.quit_times = self.options.quit_times
        return True

    def process_keypress(self) -> bool:
        return self.handle_key(self.read_key())

    def main_loop(self) -> None:
        while True:
            self.refresh_screen()
            if not self.process_keypress():
                break


def clear_screen(fd: int) -> None:
    os.write(fd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())


def run(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: hecto [filename]", file=sys.stderr)
        return 1
    if not os.isatty(STDIN_FD) or not os.isatty(STDOUT_FD):
        print("hecto: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    options = EditorOptions.from_env()
    configure_logging(options.log_file)
    editor = Editor(options, KeyReader(STDIN_FD), STDOUT_FD)

    try:
        with RawMode(STDIN_FD):
            editor.update_window_size()
            if args:
                editor.open(args[0])
            signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
            editor.set_status_message(HELP_MESSAGE)
            editor.main_loop()
    except OSError as exc:
        logger.critical("fatal: %s", exc)
        clear_screen(STDOUT_FD)
        print(f"hecto: {exc.strerror or exc}", file=sys.stderr)
        return 1
    clear_screen(STDOUT_FD)
    return 0
