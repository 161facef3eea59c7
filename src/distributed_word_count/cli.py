"""Command-line interface for distributed word count."""

import argparse
import logging
import sys

from distributed_word_count.partition import MAX_NODES
from distributed_word_count.solver import WordCountError, main_solve

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="distributed-word-count",
        description="Find the maximum number of words on any line of a text file.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the input text file",
    )

    parser.add_argument(
        "--nodes",
        type=int,
        default=MAX_NODES,
        help=f"Number of compute nodes / partitions (1-{MAX_NODES}, default: {MAX_NODES})",
    )

    parser.add_argument(
        "--startup-delay",
        type=float,
        default=0.0,
        help="Simulated node startup time in seconds (default: 0)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.nodes < 1 or args.nodes > MAX_NODES:
        parser.error(f"--nodes must be between 1 and {MAX_NODES}, got {args.nodes}")
    if args.startup_delay < 0:
        parser.error(f"--startup-delay must be non-negative, got {args.startup_delay}")

    try:
        main_solve(
            input_path=args.input_file,
            nodes=args.nodes,
            startup_delay=args.startup_delay,
        )
    except WordCountError as exc:
        logger.error("%s: %s", exc, exc.__cause__)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
