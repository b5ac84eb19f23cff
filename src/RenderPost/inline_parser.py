"""Inline formatting: turn one raw text string into styled text runs."""

from __future__ import annotations

import re
from typing import Dict, Iterator, List, Tuple

from .model import Style, TextRun

LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
FOOTNOTE_REF_RE = re.compile(r"\[\^(\d+)\]")

ESCAPE = "\\"
DELIMITERS: Dict[str, Style] = {
    "*": Style.BOLD,
    "_": Style.ITALIC,
    "`": Style.INLINE_CODE,
    "$": Style.INLINE_MATH,
}
LITERAL_STYLES = frozenset({Style.INLINE_CODE, Style.INLINE_MATH})


def _build_transitions() -> Dict[Tuple[Style, str], Style]:
    # A delimiter opens its style, or closes it when that style is already current.
    table: Dict[Tuple[Style, str], Style] = {}
    for current in (Style.PLAIN, Style.BOLD, Style.ITALIC, Style.INLINE_CODE, Style.INLINE_MATH):
        for delimiter, style in DELIMITERS.items():
            table[(current, delimiter)] = Style.PLAIN if current is style else style
    return table


TRANSITIONS = _build_transitions()


def parse_inline(text: str) -> List[TextRun]:
    """Tokenize ``text`` into runs; no run in the result is ``Style.RAW``."""
    state = InlineState()
    for char in text:
        state.feed(char)
    return state.finish()


def split_plain(text: str) -> Iterator[TextRun]:
    """Split a plain buffer around links, then footnote references.

    Links take precedence: footnote references are only looked for in a
    remainder that contains no link at all.
    """
    pos = 0
    while pos < len(text):
        match = LINK_RE.search(text, pos)
        if match is not None:
            special = TextRun(match.group(1), Style.LINK, url=match.group(2))
        else:
            match = FOOTNOTE_REF_RE.search(text, pos)
            if match is None:
                yield TextRun(text[pos:], Style.PLAIN)
                return
            special = TextRun(match.group(1), Style.FOOTNOTE_REF)
        if match.start() > pos:
            yield TextRun(text[pos : match.start()], Style.PLAIN)
        yield special
        pos = match.end()


class InlineState:
    """Left-to-right scanner state for :func:`parse_inline`."""

    def __init__(self) -> None:
        self.style = Style.PLAIN
        self.literal = False
        self.escaped = False
        self.buffer: List[str] = []
        self.runs: List[TextRun] = []

    def feed(self, char: str) -> None:
        if self.escaped:
            self.buffer.append(char)
            self.escaped = False
        elif self.literal:
            if DELIMITERS.get(char) is self.style:
                self._transition(char)
            else:
                self.buffer.append(char)
        elif char == ESCAPE:
            self.escaped = True
        elif char in DELIMITERS:
            self._transition(char)
        else:
            self.buffer.append(char)

    def finish(self) -> List[TextRun]:
        # Unterminated delimiters degrade to a single run of the open style.
        self._flush()
        return self.runs

    def _transition(self, delimiter: str) -> None:
        self._flush()
        self.style = TRANSITIONS[(self.style, delimiter)]
        self.literal = self.style in LITERAL_STYLES

    def _flush(self) -> None:
        if not self.buffer:
            return
        text = "".join(self.buffer)
        self.buffer = []
        if self.style is Style.PLAIN:
            self.runs.extend(split_plain(text))
        else:
            self.runs.append(TextRun(text, self.style))
