"""Compile source documents into HTML pages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from . import markup_parser, renderer_html
from .config import CompilerConfig
from .renderer_html import MathRenderer
from .utils import OUTPUT_SUFFIX, find_sources, read_markdown

logger = logging.getLogger(__name__)


def compile_text(
    text: str, title: str, config: CompilerConfig, math_renderer: Optional[MathRenderer] = None
) -> str:
    document = markup_parser.parse_markdown(text, title=title)
    content = renderer_html.render_document(document, config, math_renderer=math_renderer)
    return config.post_template.replace("{{content}}", content).replace("{{title}}", title)


def compile_post(
    input_path: Path,
    output_path: Path,
    config: CompilerConfig,
    math_renderer: Optional[MathRenderer] = None,
) -> None:
    logger.info("Compiling %s => %s", input_path, output_path)
    text = read_markdown(input_path)
    page = compile_text(text, input_path.stem or "untitled", config, math_renderer=math_renderer)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(page, encoding="utf-8")


def compile_all(
    source_dir: Path,
    output_dir: Path,
    config: CompilerConfig,
    math_renderer: Optional[MathRenderer] = None,
) -> List[Tuple[Path, Exception]]:
    """Compile every source in ``source_dir``; return the files that failed."""
    failures: List[Tuple[Path, Exception]] = []
    for source in find_sources(source_dir):
        target = output_dir / f"{source.stem}{OUTPUT_SUFFIX}"
        try:
            compile_post(source, target, config, math_renderer=math_renderer)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to compile %s: %s", source, exc)
            failures.append((source, exc))
    return failures
