from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

SOURCE_SUFFIX = ".md"
OUTPUT_SUFFIX = ".html"


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}{OUTPUT_SUFFIX}"
        return out_path
    return input_path.with_suffix(OUTPUT_SUFFIX)


def read_markdown(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def find_sources(directory: Path) -> List[Path]:
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == SOURCE_SUFFIX)
