from __future__ import annotations

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    C_HL_TYPES,
    HECTO_TAB_STOP,
    HL_COMMENT,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_MATCH,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
    PY_HL_EXTENSIONS,
    PY_HL_KEYWORDS,
    PY_HL_TYPES,
    SEPARATORS,
)
from .log import get_logger
from .models import Document, Keyword, Row, SyntaxDescriptor, keyword_table

logger = get_logger(__name__)


HLDB: tuple[SyntaxDescriptor, ...] = (
    SyntaxDescriptor(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=keyword_table(C_HL_KEYWORDS, C_HL_TYPES),
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    SyntaxDescriptor(
        filetype="python",
        filematch=PY_HL_EXTENSIONS,
        keywords=keyword_table(PY_HL_KEYWORDS, PY_HL_TYPES),
        singleline_comment_start="#",
        multiline_comment_start='"""',
        multiline_comment_end='"""',
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
)


def is_separator(c: str) -> bool:
    return not c or c == "\0" or c.isspace() or c in SEPARATORS


def is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def syntax_to_color(hl: int) -> int:
    if hl in (HL_COMMENT, HL_MLCOMMENT):
        return 36
    if hl == HL_KEYWORD1:
        return 33
    if hl == HL_KEYWORD2:
        return 32
    if hl == HL_STRING:
        return 35
    if hl == HL_NUMBER:
        return 31
    if hl == HL_MATCH:
        return 34
    return 37


def render_row(chars: str, tab_stop: int = HECTO_TAB_STOP) -> str:
    out: list[str] = []
    idx = 0
    for ch in chars:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % tab_stop != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


def _match_keyword(text: str, i: int, keywords: tuple[Keyword, ...]) -> Keyword | None:
    best: Keyword | None = None
    for kw in keywords:
        klen = len(kw.text)
        if not klen or not text.startswith(kw.text, i):
            continue
        if not is_separator(text[i + klen : i + klen + 1]):
            continue
        if best is None or klen > len(best.text):
            best = kw
    return best


def highlight_row(
    render: str, in_comment: bool, syntax: SyntaxDescriptor | None
) -> tuple[list[int], bool]:
    """Scan one rendered row.

    ``in_comment`` is the open multi-line comment state inherited from the
    previous row. Returns the highlight classes (one per render character)
    and whether a multi-line comment is still open at the end of the row.
    """
    n = len(render)
    hl = [HL_NORMAL] * n
    if syntax is None:
        return hl, False

    scs = syntax.singleline_comment_start
    mcs = syntax.multiline_comment_start
    mce = syntax.multiline_comment_end
    strings = bool(syntax.flags & HL_HIGHLIGHT_STRINGS)
    numbers = bool(syntax.flags & HL_HIGHLIGHT_NUMBERS)

    prev_sep = True
    in_string = ""
    i = 0
    while i < n:
        ch = render[i]
        prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

        if scs and not in_string and not in_comment and render.startswith(scs, i):
            hl[i:] = [HL_COMMENT] * (n - i)
            break

        if mcs and mce and not in_string:
            if in_comment:
                hl[i] = HL_MLCOMMENT
                if render.startswith(mce, i):
                    end = min(i + len(mce), n)
                    hl[i:end] = [HL_MLCOMMENT] * (end - i)
                    i = end
                    in_comment = False
                    prev_sep = True
                else:
                    i += 1
                continue
            if render.startswith(mcs, i):
                end = min(i + len(mcs), n)
                hl[i:end] = [HL_MLCOMMENT] * (end - i)
                i = end
                in_comment = True
                continue

        if strings:
            if in_string:
                hl[i] = HL_STRING
                if ch == "\\" and i + 1 < n:
                    hl[i + 1] = HL_STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if ch in ('"', "'"):
                in_string = ch
                hl[i] = HL_STRING
                i += 1
                continue

        if numbers:
            if (is_digit(ch) and (prev_sep or prev_hl == HL_NUMBER)) or (
                ch == "." and prev_hl == HL_NUMBER
            ):
                hl[i] = HL_NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            kw = _match_keyword(render, i, syntax.keywords)
            if kw is not None:
                klen = len(kw.text)
                hl[i : i + klen] = [kw.kind] * klen
                i += klen
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return hl, in_comment


def update_syntax(doc: Document, idx: int) -> int:
    """Re-highlight row ``idx``, then the rows after it while the open
    comment state carried into them keeps changing.

    Returns the number of rows scanned.
    """
    scanned = 0
    while 0 <= idx < doc.numrows:
        row = doc.rows[idx]
        seed = idx > 0 and doc.rows[idx - 1].open_comment
        row.hl, open_comment = highlight_row(row.render, seed, doc.syntax)
        scanned += 1
        if open_comment == row.open_comment:
            break
        row.open_comment = open_comment
        idx += 1
    return scanned


def update_row(doc: Document, row: Row) -> None:
    row.render = render_row(row.chars, doc.tab_stop)
    update_syntax(doc, row.idx)


def rehighlight_all(doc: Document) -> None:
    open_comment = False
    for row in doc.rows:
        row.hl, open_comment = highlight_row(row.render, open_comment, doc.syntax)
        row.open_comment = open_comment


def find_syntax(filename: str | None) -> SyntaxDescriptor | None:
    if not filename:
        return None
    for syntax in HLDB:
        for pattern in syntax.filematch:
            if pattern.startswith("."):
                if filename.endswith(pattern):
                    return syntax
            elif pattern in filename:
                return syntax
    return None


def select_syntax_highlight(doc: Document) -> SyntaxDescriptor | None:
    doc.syntax = find_syntax(doc.filename)
    logger.info(
        "filetype for %r: %s", doc.filename, doc.syntax.filetype if doc.syntax else "none"
    )
    rehighlight_all(doc)
    return doc.syntax
