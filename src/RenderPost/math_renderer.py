"""Render LaTeX math to SVG with ``latex`` and ``dvisvgm``."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List

from .config import CompilerConfig

logger = logging.getLogger(__name__)

TEX_NAME = "math.tex"
DVI_NAME = "math.dvi"


class MathRenderError(RuntimeError):
    """Base class for failures while rendering one math expression."""


class TypesetError(MathRenderError):
    def __init__(self, output: str) -> None:
        super().__init__(f"LaTeX failed: {output}")
        self.output = output


class MissingArtifactError(MathRenderError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"DVI file not found at {path}")
        self.path = path


class ConversionError(MathRenderError):
    def __init__(self, returncode: int, output: str) -> None:
        super().__init__(f"dvisvgm failed with exit status {returncode}: {output}")
        self.returncode = returncode
        self.output = output


class MathTimeoutError(MathRenderError):
    def __init__(self, command: str, timeout: float) -> None:
        super().__init__(f"{command} timed out after {timeout:g}s")
        self.command = command
        self.timeout = timeout


class ToolNotFoundError(MathRenderError):
    def __init__(self, command: str) -> None:
        super().__init__(f"{command} not found; is a TeX distribution installed?")
        self.command = command


def wrap_math(latex: str, display: bool = False) -> str:
    return f"\\[{latex}\\]" if display else f"${latex}$"


def render_math_to_svg(latex: str, config: CompilerConfig, display: bool = False) -> str:
    """Typeset ``latex`` and return the SVG markup produced by dvisvgm.

    Every call works in its own temporary directory. Raises a
    :class:`MathRenderError` subclass on failure.
    """
    source = config.math_template.replace("{{content}}", wrap_math(latex, display))
    summary = latex.strip().replace("\n", " ")
    with tempfile.TemporaryDirectory(prefix="renderpost-") as workdir:
        work_path = Path(workdir)
        tex_path = work_path / TEX_NAME
        tex_path.write_text(source, encoding="utf-8")

        typeset = _run(
            [
                config.latex_command,
                "-interaction=nonstopmode",
                "-halt-on-error",
                "-output-directory",
                str(work_path),
                str(tex_path),
            ],
            config.timeout,
        )
        if typeset.returncode != 0:
            logger.warning("Compiling TeX expr: %s... ERR\n%s", summary, typeset.stdout)
            raise TypesetError(typeset.stdout)

        dvi_path = work_path / DVI_NAME
        if not dvi_path.exists():
            raise MissingArtifactError(dvi_path)

        converted = _run(
            [config.dvisvgm_command, "--no-fonts", "--exact", "--stdout", str(dvi_path)],
            config.timeout,
        )
        if converted.returncode != 0:
            logger.warning("Converting TeX expr: %s... ERR\n%s", summary, converted.stderr)
            raise ConversionError(converted.returncode, converted.stderr)

    logger.debug("Compiling TeX expr: %s... OK", summary)
    return converted.stdout


def _run(args: List[str], timeout: float) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise MathTimeoutError(args[0], timeout) from exc
    except FileNotFoundError as exc:
        raise ToolNotFoundError(args[0]) from exc
