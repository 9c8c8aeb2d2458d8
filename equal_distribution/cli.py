# -*- coding: utf-8 -*-
"""
Command-line demo: rebalance bin counts given as NAME=COUNT pairs.

    python -m equal_distribution A=10 B=50 C=90 D=30
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import get_config
from .exceptions import EqualDistributionError
from .rebalancer import BinRebalancer
from .records import BinCount

logger = logging.getLogger(__name__)


def parse_bin(value: str) -> BinCount:
    """Parse a NAME=COUNT argument."""
    name, sep, count = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=COUNT, got {value!r}")
    try:
        return BinCount(identifier=name, count=int(count))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count in {value!r}")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="equal-distribution",
        description="Spread item counts equally across bins",
    )
    parser.add_argument(
        "bins",
        nargs="+",
        type=parse_bin,
        metavar="NAME=COUNT",
        help="Bin name and its current item count",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: EQDIST_LOG_LEVEL or INFO)",
    )
    return parser


async def run(bins: List[BinCount]) -> int:
    """Rebalance with a simulated transfer that always moves everything requested."""

    async def transfer(count, source, target) -> int:
        logger.info(f"Moving {count} items from {source} to {target}")
        return count

    rebalancer = BinRebalancer()
    return await rebalancer.rebalance(bins, transfer)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = args.log_level or get_config().log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        moved = asyncio.run(run(args.bins))
    except EqualDistributionError as e:
        logger.error(f"Rebalance failed: {e}")
        return 1

    print(", ".join(str(b) for b in args.bins))
    print(f"Moved {moved} items")
    return 0


if __name__ == "__main__":
    sys.exit(main())
