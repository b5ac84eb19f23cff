from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence
from urllib.parse import urlsplit

from .config import CompilerConfig
from .math_renderer import MathRenderError, render_math_to_svg
from .model import (
    Block,
    CodeBlock,
    Document,
    FootnoteBlock,
    Heading,
    HtmlBlock,
    ImageBlock,
    ListBlock,
    ListItem,
    MathBlock,
    Paragraph,
    QuoteBlock,
    Style,
    TextRun,
)

MathRenderer = Callable[[str, bool], str]


@dataclass
class RenderContext:
    config: CompilerConfig
    render_math: MathRenderer


def render_document(
    doc: Document, config: CompilerConfig, math_renderer: Optional[MathRenderer] = None
) -> str:
    """Render ``doc`` to an HTML fragment.

    ``math_renderer(latex, display)`` defaults to the latex/dvisvgm pipeline.
    """
    if math_renderer is None:

        def math_renderer(latex: str, display: bool) -> str:
            return render_math_to_svg(latex, config, display=display)

    context = RenderContext(config=config, render_math=math_renderer)
    return "".join(_dispatch_block(block, context) for block in doc.blocks)


def _dispatch_block(block: Block, context: RenderContext) -> str:
    if isinstance(block, Paragraph):
        return _tagged(_render_runs(block.runs, context), "p")
    if isinstance(block, Heading):
        return _render_heading(block)
    if isinstance(block, CodeBlock):
        return f'<pre><code class="code-{block.language}">{block.code}</code></pre>'
    if isinstance(block, MathBlock):
        return f'<span class="display-math">{_render_math(block.latex, True, context)}</span>'
    if isinstance(block, ImageBlock):
        return _render_image(block, context)
    if isinstance(block, HtmlBlock):
        return block.html
    if isinstance(block, QuoteBlock):
        return f"<p class=quote>{block.text}</p>\n"
    if isinstance(block, FootnoteBlock):
        return (
            f'<p id="fn{block.id}"><a href="#ref{block.id}">[{block.id}]</a> '
            f"{_render_runs(block.runs, context)}</p>"
        )
    if isinstance(block, ListBlock):
        return render_list(block.items, "ol" if block.ordered else "ul", context)
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def _tagged(content: str, tag: str) -> str:
    return f"<{tag}>{content}</{tag}>\n"


def _render_heading(heading: Heading) -> str:
    if heading.level == 1:
        return _tagged(heading.text, "h1") + "<hr><br>"
    return _tagged(heading.text, "h2")


def _render_image(block: ImageBlock, context: RenderContext) -> str:
    src = resolve_image_src(context.config.images_dir, block.src)
    if block.width == 100:
        return f'<img src="{src}" alt="{block.alt}" class="image">'
    return f'<img src="{src}" alt="{block.alt}" class="image" style="width: {block.width}%;">'


def resolve_image_src(images_dir: Path, src: str) -> str:
    """Join a relative image path onto ``images_dir``; URLs and absolute paths pass through."""
    if urlsplit(src).scheme or src.startswith("/"):
        return src
    return posixpath.join(images_dir.as_posix(), src)


def _render_math(latex: str, display: bool, context: RenderContext) -> str:
    try:
        return context.render_math(latex, display)
    except MathRenderError as exc:
        return f"<code class='latex-error'>{exc}</code>"


def _render_runs(runs: Iterable[TextRun], context: RenderContext) -> str:
    return "".join(render_run(run, context) for run in runs)


def render_run(run: TextRun, context: RenderContext) -> str:
    if run.style is Style.BOLD:
        return f'<span class="bold"> {run.text} </span>'
    if run.style is Style.ITALIC:
        return f'<span class="italic"> {run.text} </span>'
    if run.style is Style.INLINE_MATH:
        return f'<span class="inline-math">{_render_math(run.text, False, context)}</span>'
    if run.style is Style.INLINE_CODE:
        return f' <span class="inline-code">{run.text}</span>'
    if run.style is Style.LINK:
        return f'<a href="{run.url}">{run.text}</a>'
    if run.style is Style.FOOTNOTE_REF:
        return f'<sup id="ref{run.text}"><a href="#fn{run.text}">[{run.text}]</a></sup>'
    return run.text


def render_list(items: Sequence[ListItem], tag: str, context: RenderContext) -> str:
    """Rebuild nested list markup from flat ``(level, content)`` items.

    A jump of several levels opens one nested list per level; levels without
    an item of their own get an empty ``<li>`` wrapper so the markup stays
    balanced.
    """
    parts: List[str] = [f"<{tag}>"]
    current = 0
    item_open = False
    for item in items:
        level = max(item.level, 0)
        if level > current:
            for _ in range(level - current):
                if not item_open:
                    parts.append("<li>")
                parts.append(f"<{tag}>")
                item_open = False
        elif level < current:
            parts.append("</li>")
            parts.extend(f"</{tag}></li>" for _ in range(current - level))
        elif item_open:
            parts.append("</li>")
        parts.append("<li>")
        parts.append(_render_runs(item.content, context))
        item_open = True
        current = level
    if item_open:
        parts.append("</li>")
    parts.extend(f"</{tag}></li>" for _ in range(current))
    parts.append(f"</{tag}>\n")
    return "".join(parts)
