from __future__ import annotations

from dataclasses import dataclass

from .constants import ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT, ARROW_UP, ENTER, ESC, HL_MATCH
from .models import Document


@dataclass(slots=True)
class SearchSnapshot:
    cx: int
    cy: int
    coloff: int
    rowoff: int

    @classmethod
    def capture(cls, doc: Document) -> "SearchSnapshot":
        return cls(doc.cx, doc.cy, doc.coloff, doc.rowoff)

    def restore(self, doc: Document) -> None:
        doc.cx = self.cx
        doc.cy = self.cy
        doc.coloff = self.coloff
        doc.rowoff = self.rowoff


class SearchEngine:
    """Incremental search, driven one keystroke at a time by the prompt.

    The row holding the current match carries a temporary ``HL_MATCH``
    overlay; its real highlighting is put back before the next step and
    when the search ends.
    """

    def __init__(self, doc: Document) -> None:
        self.doc = doc
        self.last_match: int | None = None
        self.direction = 1
        self._saved_hl_line: int | None = None
        self._saved_hl: list[int] | None = None

    def restore_highlight(self) -> None:
        if self._saved_hl is not None and self._saved_hl_line is not None:
            if self._saved_hl_line < self.doc.numrows:
                self.doc.rows[self._saved_hl_line].hl = self._saved_hl
        self._saved_hl = None
        self._saved_hl_line = None

    def reset(self) -> None:
        self.restore_highlight()
        self.last_match = None
        self.direction = 1

    def find_next(self, query: str) -> tuple[int, int] | None:
        """Step cyclically from the last match; returns ``(row, render offset)``."""
        numrows = self.doc.numrows
        current = -1 if self.last_match is None else self.last_match
        for _ in range(numrows):
            current = (current + self.direction) % numrows
            offset = self.doc.rows[current].render.find(query)
            if offset != -1:
                return current, offset
        return None

    def on_key(self, query: str, key: int) -> None:
        self.restore_highlight()

        if key in (ENTER, ESC):
            self.last_match = None
            self.direction = 1
            return
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.last_match = None
            self.direction = 1

        if self.last_match is None:
            self.direction = 1

        match = self.find_next(query)
        if match is None:
            return

        row_idx, offset = match
        row = self.doc.rows[row_idx]
        self.last_match = row_idx
        self.doc.cy = row_idx
        self.doc.cx = row.rx_to_cx(offset, self.doc.tab_stop)
        # Scroll past the end so the next frame puts the match on the top line.
        self.doc.rowoff = self.doc.numrows

        self._saved_hl_line = row_idx
        self._saved_hl = row.hl.copy()
        end = min(offset + len(query), row.rsize)
        row.hl[offset:end] = [HL_MATCH] * (end - offset)
