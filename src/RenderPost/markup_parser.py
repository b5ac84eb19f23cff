from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from .inline_parser import parse_inline
from .list_parser import consume_list, match_list_item
from .model import (
    Block,
    CodeBlock,
    Document,
    FootnoteBlock,
    Heading,
    HtmlBlock,
    ImageBlock,
    MathBlock,
    Paragraph,
    QuoteBlock,
    Style,
    TextRun,
)

logger = logging.getLogger(__name__)

CODE_FENCE = "```"
MATH_OPEN = "\\["
MATH_CLOSE = "\\]"
COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
HTML_OPEN = "<html>"
HTML_CLOSE = "</html>"
QUOTE_PREFIX = ">> "

IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)(?:\{(\d+)\})?")
FOOTNOTE_DEF_RE = re.compile(r"^\[\^(\d+)\]:\s*(.*)")


def parse_markdown(text: str, title: str | None = None) -> Document:
    """Parse a source document into blocks with all inline text formatted."""
    blocks = [_format_block(block) for block in parse_blocks(text)]
    return Document(blocks=blocks, title=title)


def parse_blocks(text: str) -> List[Block]:
    """Segment ``text`` into blocks; paragraph and footnote text stays RAW."""
    lines = text.splitlines()
    blocks: List[Block] = []
    paragraph: List[str] = []
    expecting_block = True
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line.strip():
            _flush_paragraph(paragraph, blocks)
            expecting_block = True
            continue
        if not expecting_block:
            paragraph.append(line)
            continue
        expecting_block = False

        if line.startswith("#"):
            level = len(line) - len(line.lstrip("#"))
            blocks.append(Heading(level=level, text=line[level:].strip()))
        elif line.startswith(CODE_FENCE):
            body, i = _consume_until(lines, i, CODE_FENCE, "code block")
            blocks.append(CodeBlock(language=line[len(CODE_FENCE) :].strip(), code=_join_lines(body)))
        elif line.startswith(MATH_OPEN):
            body, i = _consume_until(lines, i, MATH_CLOSE, "math block")
            blocks.append(MathBlock(latex=_join_lines(body)))
        elif line.startswith("!["):
            image = _parse_image(line)
            if image is not None:
                blocks.append(image)
        elif line.startswith(COMMENT_OPEN):
            _, i = _consume_until(lines, i, COMMENT_CLOSE, "comment")
        elif line.startswith(HTML_OPEN):
            body, i = _consume_until(lines, i, HTML_CLOSE, "html block")
            blocks.append(HtmlBlock(html="".join(body)))
        elif line.startswith(QUOTE_PREFIX):
            blocks.append(QuoteBlock(text=line[len(QUOTE_PREFIX) :].strip()))
        elif line.startswith("[^"):
            footnote = _parse_footnote(line)
            if footnote is not None:
                blocks.append(footnote)
        elif match_list_item(line) is not None:
            list_block, i = consume_list(lines, i - 1)
            blocks.append(list_block)
        else:
            paragraph.append(line)

    _flush_paragraph(paragraph, blocks)
    return blocks


def _flush_paragraph(paragraph: List[str], blocks: List[Block]) -> None:
    if not paragraph:
        return
    # Soft line wraps become single spaces.
    text = "".join(f"{line} " for line in paragraph)
    blocks.append(Paragraph(runs=[TextRun(text, Style.RAW)]))
    paragraph.clear()


def _consume_until(lines: Sequence[str], index: int, closing: str, construct: str) -> Tuple[List[str], int]:
    body: List[str] = []
    i = index
    while i < len(lines):
        line = lines[i]
        i += 1
        if line.startswith(closing):
            return body, i
        body.append(line)
    logger.warning("Unterminated %s starting at line %d consumed to end of input", construct, index)
    return body, i


def _join_lines(lines: Sequence[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def _parse_image(line: str) -> Optional[ImageBlock]:
    match = IMAGE_RE.search(line)
    if match is None:
        logger.debug("Dropping malformed image line: %s", line)
        return None
    width = int(match.group(3)) if match.group(3) else 100
    return ImageBlock(alt=match.group(1), src=match.group(2), width=width)


def _parse_footnote(line: str) -> Optional[FootnoteBlock]:
    match = FOOTNOTE_DEF_RE.match(line)
    if match is None:
        logger.debug("Dropping malformed footnote definition: %s", line)
        return None
    return FootnoteBlock(id=match.group(1), runs=[TextRun(match.group(2), Style.RAW)])


def _format_block(block: Block) -> Block:
    if isinstance(block, Paragraph):
        return Paragraph(runs=_format_runs(block.runs))
    if isinstance(block, FootnoteBlock):
        return FootnoteBlock(id=block.id, runs=_format_runs(block.runs))
    return block


def _format_runs(runs: List[TextRun]) -> List[TextRun]:
    formatted: List[TextRun] = []
    for run in runs:
        if run.style is Style.RAW:
            formatted.extend(parse_inline(run.text))
        else:
            formatted.append(run)
    return formatted
