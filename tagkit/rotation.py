"""Rotate the non-zero entries of a sequence among their own positions."""

from __future__ import annotations

from typing import Iterable, List


def rotate_nonzero(values: Iterable[int]) -> List[int]:
    """Shift every non-zero value to the next non-zero position, wrapping around.

    Zero entries stay where they are; the last non-zero value moves to the
    position of the first one.
    """
    result = list(values)
    positions = [index for index, value in enumerate(result) if value != 0]
    if not positions:
        return result
    moved = [result[positions[-1]]] + [result[index] for index in positions[:-1]]
    for index, value in zip(positions, moved):
        result[index] = value
    return result