"""
Command line entry point.

Reads URL-like tokens from positional arguments and, when stdin is not a
terminal, from whitespace-separated standard input, then prints one line per
processed record.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional, TextIO

from url_fields.config import get_config
from url_fields.dedup import STRATEGIES
from url_fields.processor import URLProcessor
from url_fields.template import PLACEHOLDER_HELP

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    config = get_config()
    parser = argparse.ArgumentParser(
        prog="url-fields",
        description="Extract fields from URLs, render them through a template, or dedup them.",
        epilog=PLACEHOLDER_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "pattern",
        help="Field name or alias (domain, d, path, ...), a template such as "
        "'%%s%%/%%d%%p', 'dedup' or 'json'.",
    )
    parser.add_argument("args", nargs="*", help="URLs (stdin is read too when piped).")
    parser.add_argument(
        "--strict",
        default=config.normalization.domain_policy == "strict",
        action=argparse.BooleanOptionalAction,
        help="Drop URLs whose host is not a registrable domain (defaults to config).",
    )
    parser.add_argument(
        "--private-requires-root",
        default=config.normalization.private_requires_root,
        action=argparse.BooleanOptionalAction,
        help="Require a registrable name below private suffixes (defaults to config).",
    )
    parser.add_argument(
        "--dedup-strategy",
        choices=STRATEGIES,
        default=config.dedup.strategy,
        help="'adjacent' merges neighbours after sorting, 'cluster' merges "
        "all transitively equivalent URLs (defaults to config).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to WARNING unless LOG_LEVEL is set).",
    )
    return parser.parse_args(argv)


def collect_tokens(args: Iterable[str], stdin: TextIO) -> list[str]:
    """Positional arguments first, then whitespace-split stdin if it is piped."""
    tokens = list(args)
    if not stdin.isatty():
        tokens.extend(stdin.read().split())
    return tokens


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    config = get_config()

    log_level = args.log_level
    if log_level is None:
        log_level = config.log_level if "log_level" in config.model_fields_set else "WARNING"

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stderr,
    )

    config.normalization.domain_policy = "strict" if args.strict else "lenient"
    config.normalization.private_requires_root = args.private_requires_root
    config.dedup.strategy = args.dedup_strategy

    tokens = collect_tokens(args.args, sys.stdin)
    logger.info("Read %d tokens", len(tokens))

    processor = URLProcessor(config=config)
    try:
        for line in processor.process(args.pattern, tokens):
            print(line)
    except BrokenPipeError:
        # Reader went away (e.g. piped into head); skip the flush at exit
        logger.debug("Output pipe closed, stopping")
        sys.stdout = None
        sys.exit(1)


if __name__ == "__main__":
    main()
