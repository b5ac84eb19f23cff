from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Style(Enum):
    """Inline style of a text run."""

    RAW = "raw"
    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    INLINE_MATH = "inline_math"
    INLINE_CODE = "inline_code"
    FOOTNOTE_REF = "footnote_ref"
    LINK = "link"


@dataclass(frozen=True)
class TextRun:
    text: str
    style: Style = Style.PLAIN
    url: str | None = None


@dataclass(frozen=True)
class ListItem:
    level: int
    content: List[TextRun]


@dataclass
class Block:
    """Base class for block-level nodes."""


@dataclass
class Document:
    blocks: List[Block]
    title: Optional[str] = None


@dataclass
class Paragraph(Block):
    runs: List[TextRun]


@dataclass
class Heading(Block):
    level: int
    text: str


@dataclass
class CodeBlock(Block):
    language: str
    code: str


@dataclass
class MathBlock(Block):
    latex: str


@dataclass
class ImageBlock(Block):
    alt: str
    src: str
    width: int = 100


@dataclass
class HtmlBlock(Block):
    """Raw HTML, emitted as-is."""

    html: str


@dataclass
class QuoteBlock(Block):
    text: str


@dataclass
class FootnoteBlock(Block):
    id: str
    runs: List[TextRun]


@dataclass
class ListBlock(Block):
    ordered: bool
    items: List[ListItem] = field(default_factory=list)
