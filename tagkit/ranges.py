"""Random non-overlapping address ranges and interval-tree timing."""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from tagkit.intervaltree import IntervalTree

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10_000_000
DEFAULT_FILENAME = "ranges.txt"
DEFAULT_SPAN: Tuple[int, int] = (0x000000000000, 0xFFFFFFFFFFFF)
DEFAULT_WIDTH = 100
STACK_RESERVED: Tuple[int, int] = (0x0000FFFF00000000, 0x0000FFFFFFFFFFFF)
GENERATOR_CAPACITY = 10_000_000
TIMING_CAPACITY = 5000

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class Range:
    """A closed address range ``[low, high]``."""

    low: int
    high: int


def generate_non_overlapping_ranges(
    count: int,
    rng: Optional[random.Random] = None,
    span: Tuple[int, int] = DEFAULT_SPAN,
    width: int = DEFAULT_WIDTH,
) -> List[Range]:
    """Draw ``count`` ranges of ``width`` that overlap neither each other nor the stack area.

    Each range starts at a random address inside ``span`` (inclusive) and
    ends ``width`` further on. Candidates that overlap a range already
    accepted are drawn again.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    lower, upper = span
    if upper < lower:
        raise ValueError("span upper bound is below its lower bound")
    rng = rng if rng is not None else random.Random()

    tree = IntervalTree(capacity=GENERATOR_CAPACITY, reserved=[STACK_RESERVED])
    ranges: List[Range] = []
    while len(ranges) < count:
        low = lower + rng.randrange(upper - lower + 1)
        high = low + width
        if tree.overlaps(low, high):
            continue
        tree.insert(low, high)
        ranges.append(Range(low, high))
        if (len(ranges) - 1) % 100 == 0:
            logger.debug("generated range #%d", len(ranges) - 1)
    return ranges


def write_ranges(path: PathLike, ranges: Iterable[Range]) -> None:
    """Write one ``low high`` pair per line."""
    with open(path, "w", encoding="ascii") as handle:
        for item in ranges:
            handle.write(f"{item.low} {item.high}\n")


def _parse_unsigned(token: str) -> Optional[int]:
    digits = token[1:] if token.startswith("+") else token
    return int(digits) if digits.isdigit() else None


def read_ranges(path: PathLike) -> List[Range]:
    """Read ``low high`` pairs until the end of the file or the first malformed pair."""
    with open(path, "r", encoding="ascii", errors="replace") as handle:
        tokens = handle.read().split()

    ranges: List[Range] = []
    for low_token, high_token in zip(tokens[::2], tokens[1::2]):
        low = _parse_unsigned(low_token)
        high = _parse_unsigned(high_token)
        if low is None or high is None:
            break
        ranges.append(Range(low, high))
    return ranges


def time_insertions(
    ranges: Iterable[Range], tree: Optional[IntervalTree] = None
) -> float:
    """Insert every range into ``tree`` and return the elapsed milliseconds."""
    if tree is None:
        tree = IntervalTree(capacity=TIMING_CAPACITY, reserved=[STACK_RESERVED])
    start = time.perf_counter()
    for item in ranges:
        tree.insert(item.low, item.high)
    return (time.perf_counter() - start) * 1000.0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagkit-ranges",
        description="Generate random non-overlapping ranges or time their insertion.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="write random ranges to a file")
    generate.add_argument("--count", type=int, default=DEFAULT_COUNT)
    generate.add_argument("--output", default=DEFAULT_FILENAME)
    generate.add_argument("--seed", type=int, default=None)

    timing = commands.add_parser("time", help="time inserting ranges read from a file")
    timing.add_argument("--input", default=DEFAULT_FILENAME)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the ``generate`` or ``time`` command."""
    args = _build_parser().parse_args(argv)

    if args.command == "generate":
        rng = random.Random(args.seed) if args.seed is not None else None
        ranges = generate_non_overlapping_ranges(args.count, rng)
        write_ranges(args.output, ranges)
        print(
            f'Non-overlapping ranges generated and written to file "{args.output}"'
        )
        return 0

    try:
        ranges = read_ranges(args.input)
    except OSError:
        print(f"Error opening file: {args.input}", file=sys.stderr)
        ranges = []
    if not ranges:
        print(f"No ranges found in file: {args.input}", file=sys.stderr)
        return 1

    elapsed = time_insertions(ranges)
    print(f"Inserted {len(ranges)} ranges in {elapsed:.0f} ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())