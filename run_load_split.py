"""Load a PDF and split its pages into token windows in one step.

Usage:
  python run_load_split.py --pdf path/to/file.pdf [--chunk-size 512 --chunk-overlap 100]
  python run_load_split.py --pdf secret.pdf --password hunter2 --no-split
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from chunking import ChunkingError, ChunkingServiceConfig, ConfigurationError, TokenSplitterConfig
from logging_config import get_logger, setup_logging
from pdf_loader import LoaderError, LoaderService, LoaderServiceConfig, format_error_chain

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load a PDF and split it into token chunks.")
    parser.add_argument("--pdf", required=True, help="Path to the PDF file")
    parser.add_argument("--password", default=None, help="Password for encrypted PDFs")
    parser.add_argument("--chunk-size", type=int, default=None, help="Max tokens per chunk")
    parser.add_argument("--chunk-overlap", type=int, default=None, help="Tokens shared by neighbouring chunks")
    parser.add_argument("--model", default=None, help="Model whose tokenizer is used")
    parser.add_argument("--encoding", default=None, help="Tokenizer encoding (used without --model)")
    parser.add_argument("--no-split", action="store_true", help="Only extract pages, do not chunk")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def build_config(args: argparse.Namespace) -> LoaderServiceConfig:
    base = ChunkingServiceConfig.from_env().splitter
    overrides = {}
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.chunk_overlap is not None:
        overrides["chunk_overlap"] = args.chunk_overlap
    if args.model is not None:
        overrides["model_name"] = args.model
    if args.encoding is not None:
        overrides["encoding_name"] = args.encoding
        if args.model is None:
            overrides["model_name"] = None

    try:
        splitter = TokenSplitterConfig(**{**base.model_dump(), **overrides})
    except ValidationError as exc:
        raise ConfigurationError("Invalid chunking options", details=str(exc)) from exc
    return LoaderServiceConfig(chunking=ChunkingServiceConfig(splitter=splitter))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    load_dotenv(Path(".env"))

    try:
        service = LoaderService(config=build_config(args))
        units = service.load_file(args.pdf, password=args.password, split=not args.no_split)
    except (LoaderError, ChunkingError) as exc:
        logger.error(f"{exc.stage} failed:\n{format_error_chain(exc)}")
        return 1

    logger.info(f"Produced {len(units)} units from {args.pdf}")
    json.dump(
        [unit.model_dump(mode="json") for unit in units],
        sys.stdout,
        ensure_ascii=False,
        indent=2,
    )
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
