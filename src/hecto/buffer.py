"""Structural edits on the rows of a :class:`~hecto.models.Document`.

Every edit recomputes the render form and highlighting of the rows it
touches before returning, and bumps ``Document.dirty``.
"""

from __future__ import annotations

from .models import Document, Row
from .syntax import update_row, update_syntax


class TextBuffer:
    def __init__(self, doc: Document) -> None:
        self.doc = doc

    @property
    def rows(self) -> list[Row]:
        return self.doc.rows

    def _renumber(self, start: int) -> None:
        for j in range(start, self.doc.numrows):
            self.rows[j].idx = j

    def _seed(self, at: int) -> bool:
        return at > 0 and self.rows[at - 1].open_comment

    def insert_row(self, at: int, text: str) -> Row | None:
        if at < 0 or at > self.doc.numrows:
            return None
        # The new row starts with the state its successor was scanned with,
        # so the cascade only runs if the new row changes it.
        row = Row(idx=at, chars=text, open_comment=self._seed(at))
        self.rows.insert(at, row)
        self._renumber(at + 1)
        update_row(self.doc, row)
        self.doc.dirty += 1
        return row

    def delete_row(self, at: int) -> bool:
        if at < 0 or at >= self.doc.numrows:
            return False
        removed = self.rows.pop(at)
        self._renumber(at)
        if at < self.doc.numrows and self._seed(at) != removed.open_comment:
            update_syntax(self.doc, at)
        self.doc.dirty += 1
        return True

    def insert_char(self, row: Row, at: int, ch: str) -> None:
        if at < 0 or at > row.size:
            at = row.size
        row.chars = row.chars[:at] + ch + row.chars[at:]
        update_row(self.doc, row)
        self.doc.dirty += 1

    def append_string(self, row: Row, text: str) -> None:
        row.chars += text
        update_row(self.doc, row)
        self.doc.dirty += 1

    def delete_char(self, row: Row, at: int) -> bool:
        if at < 0 or at >= row.size:
            return False
        row.chars = row.chars[:at] + row.chars[at + 1 :]
        update_row(self.doc, row)
        self.doc.dirty += 1
        return True

    def split_row(self, cy: int, cx: int) -> None:
        if cy >= self.doc.numrows:
            self.insert_row(self.doc.numrows, "")
            return
        row = self.rows[cy]
        cx = max(0, min(cx, row.size))
        if cx == 0:
            self.insert_row(cy, "")
            return
        self.insert_row(cy + 1, row.chars[cx:])
        row.chars = row.chars[:cx]
        update_row(self.doc, row)

    def join_row(self, cy: int) -> int | None:
        """Append row ``cy + 1`` onto row ``cy``. Returns the join column."""
        if cy < 0 or cy + 1 >= self.doc.numrows:
            return None
        row = self.rows[cy]
        join_at = row.size
        self.append_string(row, self.rows[cy + 1].chars)
        self.delete_row(cy + 1)
        return join_at

    def to_text(self) -> tuple[str, int]:
        text = "".join(f"{row.chars}\n" for row in self.rows)
        return text, len(text)
