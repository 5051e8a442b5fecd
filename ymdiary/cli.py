"""
YMDiary command line interface.

Entry point for the `ymdiary` command. Reads a diary text file, parses it into
typed blocks and prints them either as a readable summary or as JSON.
"""

import json
import logging
import sys
import argparse
from pathlib import Path
from typing import Dict, List, Optional

from . import __version__
from .config import ConfigManager, config
from .editing import render_block
from .models import LongMemoBlock, ParseResult
from .parser import BlockParser
from .tags import normalize_tags


def setup_logging(cfg: ConfigManager):
    """Configure logging for the application."""
    level = getattr(logging, str(cfg.log_level).upper(), logging.INFO)

    # stdout carries the parse output
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if cfg.log_filename:
        handlers.append(logging.FileHandler(cfg.log_filename))

    logging.basicConfig(
        level=level,
        format=cfg.log_format,
        handlers=handlers,
        force=True
    )


def read_input(source: str) -> str:
    """
    Read diary text from a file path, or from stdin when `source` is '-'.
    """
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def option_overrides(args: argparse.Namespace) -> Dict[str, bool]:
    """Parser options switched off on the command line."""
    overrides = {}
    if args.no_long_memo:
        overrides["enable_long_memo"] = False
    if args.no_events:
        overrides["enable_event_parsing"] = False
    if args.no_tags:
        overrides["enable_tag_extraction"] = False
    return overrides


def apply_tag_normalization(result: ParseResult) -> ParseResult:
    """Return a copy of `result` with every block's tags normalized."""
    blocks = [
        block.model_copy(update={"tags": normalize_tags(block.tags)})
        for block in result.blocks
    ]
    return ParseResult(blocks=blocks, errors=result.errors)


def format_summary(result: ParseResult) -> str:
    """
    Format a parse result for the terminal.

    One line per block, then the error list if any line was rejected.
    """
    lines = []
    for i, block in enumerate(result.blocks, 1):
        first_line = render_block(block).split("\n", 1)[0]
        entry = f"{i:>3}. {block.type:<10} {first_line}"
        if isinstance(block, LongMemoBlock) and block.body:
            entry += f"  (+{len(block.body.splitlines())} lines)"
        lines.append(entry)

    if result.errors:
        lines.append("")
        lines.append(f"Errors ({len(result.errors)}):")
        lines.extend(f"  {error}" for error in result.errors)

    return "\n".join(lines)


def format_json(result: ParseResult) -> str:
    return json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="YMDiary - parse diary text into structured blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ymdiary today.txt                     # Print a summary of the blocks
  ymdiary today.txt --format json       # Print blocks as JSON
  cat today.txt | ymdiary -             # Read from stdin
  ymdiary today.txt --strict            # Exit 1 if any line failed
        """
    )

    parser.add_argument(
        "file",
        help="Diary text file to parse, or '-' for stdin"
    )

    parser.add_argument(
        "--format",
        choices=["summary", "json"],
        default=None,
        help="Output format (default: from config, 'summary')"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a YAML configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--no-long-memo",
        action="store_true",
        help="Treat '> ' lines as plain notes"
    )

    parser.add_argument(
        "--no-events",
        action="store_true",
        help="Do not recognize timed lines as events"
    )

    parser.add_argument(
        "--no-tags",
        action="store_true",
        help="Do not collect #tags"
    )

    parser.add_argument(
        "--normalize-tags",
        action="store_true",
        help="Lowercase and de-duplicate tags in the output"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any line could not be parsed"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"YMDiary {__version__}"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    cfg = ConfigManager(args.config) if args.config else config
    setup_logging(cfg)

    try:
        text = read_input(args.file)
    except OSError as e:
        logging.error(f"Failed to read {args.file}: {e}")
        return 1

    parser = BlockParser.from_config(cfg, overrides=option_overrides(args))
    result = parser.parse(text)
    logging.info(f"Parsed {len(result.blocks)} blocks with {len(result.errors)} errors")

    for error in result.errors:
        logging.warning(error)

    if args.normalize_tags:
        result = apply_tag_normalization(result)

    output_format = args.format or cfg.output_format
    if output_format == "json":
        print(format_json(result))
    else:
        print(format_summary(result))

    if args.strict and result.errors:
        return 1
    return 0

