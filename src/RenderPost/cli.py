from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import compiler
from .config import load_config
from .utils import configure_logging, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="renderpost",
        description="Convert markup posts into HTML pages with SVG math.",
    )
    parser.add_argument("input", type=str, help="Path to a source file or a directory of sources")
    parser.add_argument("-o", "--output", type=str, help="Output HTML path (or directory for batch mode)")
    parser.add_argument("-c", "--config", type=str, help="YAML config file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    config = load_config(args.config)

    if input_path.is_dir():
        output_dir = Path(args.output) if args.output else input_path
        logging.info("Compiling all sources in %s", input_path)
        failures = compiler.compile_all(input_path, output_dir, config)
        if failures:
            logging.error("%d file(s) failed", len(failures))
            return 1
        logging.info("Done.")
        return 0

    output_path = resolve_output_path(input_path, args.output)
    compiler.compile_post(input_path, output_path, config)
    logging.info("Done. Saved to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
