"""Find page-aligned stretches of released chunks that can be unmapped.

A region is split into equal chunks, each described by a small state value:

* bit ``LEFT_HALF`` - the left part of the chunk is still mapped,
* bit ``RIGHT_HALF`` - the right part of the chunk is still mapped,
* bit ``PARTIAL`` - the chunk was already partly unmapped.

A state of zero means the chunk is in use (or fully unmapped) and cannot be
released. Runs of releasable chunks are trimmed to page boundaries and the
states are updated to record what was released.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, MutableSequence, Optional

logger = logging.getLogger(__name__)

PAGE_SIZE = 4096

RIGHT_HALF = 0b001
LEFT_HALF = 0b010
PARTIAL = 0b100
RELEASABLE = LEFT_HALF | RIGHT_HALF


def round_up_to(size: int, boundary: int) -> int:
    """Round ``size`` up to a multiple of the power-of-two ``boundary``."""
    return (size + boundary - 1) & ~(boundary - 1)


def round_down_to(value: int, boundary: int) -> int:
    """Round ``value`` down to a multiple of the power-of-two ``boundary``."""
    return value & ~(boundary - 1)


def is_aligned(value: int, alignment: int) -> bool:
    """Tell whether ``value`` is a multiple of the power-of-two ``alignment``."""
    return (value & (alignment - 1)) == 0


def min_chunks_per_page(chunk_size: int, page_size: int = PAGE_SIZE) -> int:
    """Smallest number of consecutive chunks that can span a whole page."""
    if chunk_size <= 0 or page_size <= 0:
        raise ValueError("chunk_size and page_size must be positive")
    if chunk_size >= page_size:
        return 1
    return -(-page_size // chunk_size)


@dataclass(frozen=True)
class UnmapRange:
    """A page-aligned address range chosen for unmapping."""

    begin: int
    end: int
    first_chunk: int
    last_chunk: int
    first_complete: bool
    last_complete: bool
    unmapped: int

    @property
    def size(self) -> int:
        return self.end - self.begin

    def __str__(self) -> str:
        opening = "[" if self.first_complete else "("
        closing = "]" if self.last_complete else ")"
        return (
            f"Unmapping {self.begin:#x}-{self.end:#x} chunk id "
            f"{opening}{self.first_chunk}-{self.last_chunk}{closing} "
            f"({self.unmapped} chunks)"
        )


def unmap_fragment_region(
    region: int,
    states: MutableSequence[int],
    chunk_size: int,
    min_chunk_num: int,
    start_chunk: int,
    end_chunk: int,
    page_size: int = PAGE_SIZE,
) -> Optional[UnmapRange]:
    """Trim chunks ``[start_chunk, end_chunk)`` to pages and mark them released.

    Returns the range to unmap, or None when the run cannot cover a page or
    consists only of chunks that were already partly released.
    """
    if end_chunk - start_chunk < min_chunk_num:
        return None
    if all(states[i] & PARTIAL for i in range(start_chunk, end_chunk)):
        return None

    logger.debug(
        "Ready for unmapping %#x-%#x chunk id [%d-%d]",
        region + start_chunk * chunk_size,
        region + end_chunk * chunk_size,
        start_chunk,
        end_chunk - 1,
    )

    begin = round_up_to(region + start_chunk * chunk_size, page_size)
    end = round_down_to(region + end_chunk * chunk_size, page_size)
    if begin >= end:
        return None

    first = (begin - region) // chunk_size
    offset = end - region
    last = offset // chunk_size - (1 if offset % chunk_size == 0 else 0)

    unmapped = 0
    for index in range(first + 1, last):
        states[index] = 0
        unmapped += 1

    first_begin = region + first * chunk_size
    last_begin = region + last * chunk_size
    if first_begin >= begin:
        states[first] &= PARTIAL | RIGHT_HALF
    if first_begin + chunk_size <= end:
        states[first] &= PARTIAL | LEFT_HALF
    if last_begin >= begin:
        states[last] &= PARTIAL | RIGHT_HALF
    if last_begin + chunk_size <= end:
        states[last] &= PARTIAL | LEFT_HALF

    if states[first] & RELEASABLE == 0:
        states[first] = 0
        unmapped += 1
    else:
        states[first] |= PARTIAL
    if first != last and states[last] & RELEASABLE == 0:
        states[last] = 0
        unmapped += 1
    else:
        states[last] |= PARTIAL

    result = UnmapRange(
        begin=begin,
        end=end,
        first_chunk=first,
        last_chunk=last,
        first_complete=states[first] == 0,
        last_complete=states[last] == 0,
        unmapped=unmapped,
    )
    logger.debug("%s", result)
    return result


def _format_states(states: MutableSequence[int]) -> str:
    parts = []
    for index, state in enumerate(states):
        if index % 8 == 0:
            parts.append(f" [#{index}]")
        parts.append(str(state))
    return "".join(parts)


def scan_and_unmap(
    region: int,
    states: MutableSequence[int],
    chunk_size: int,
    page_size: int = PAGE_SIZE,
) -> List[UnmapRange]:
    """Release every run of non-zero chunk states; return the ranges to unmap."""
    min_chunk_num = min_chunks_per_page(chunk_size, page_size)
    logger.debug("%s", _format_states(states))

    results: List[UnmapRange] = []
    start: Optional[int] = None
    for index, state in enumerate(states):
        if state:
            if start is None:
                start = index
        elif start is not None:
            found = unmap_fragment_region(
                region, states, chunk_size, min_chunk_num, start, index, page_size
            )
            if found is not None:
                results.append(found)
            start = None

    if start is not None:
        found = unmap_fragment_region(
            region, states, chunk_size, min_chunk_num, start, len(states), page_size
        )
        if found is not None:
            results.append(found)
    return results