"""Self-balancing tree of non-overlapping address intervals."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

LEVEL_GAP = 10


class IntervalOverlapError(ValueError):
    """Raised when an inserted interval overlaps one already in the tree."""

    def __init__(self, low: int, high: int) -> None:
        super().__init__(
            f"Interval [{low:#x}, {high:#x}] overlaps with existing intervals."
        )
        self.low = low
        self.high = high


@dataclass(eq=False)
class IntervalNode:
    """A tree node holding one interval and the largest bound below it."""

    low: int
    high: int
    max_high: int = 0
    left: Optional["IntervalNode"] = None
    right: Optional["IntervalNode"] = None
    height: int = 1

    def __post_init__(self) -> None:
        self.max_high = max(self.max_high, self.high)

    def refresh(self) -> None:
        """Recompute height and max_high from the children."""
        self.height = 1 + max(_height(self.left), _height(self.right))
        self.max_high = max(
            self.high,
            self.left.max_high if self.left else 0,
            self.right.max_high if self.right else 0,
        )


def _height(node: Optional[IntervalNode]) -> int:
    return node.height if node is not None else 0


def _rotate_right(y: IntervalNode) -> IntervalNode:
    x = y.left
    assert x is not None
    y.left = x.right
    x.right = y
    y.refresh()
    x.refresh()
    return x


def _rotate_left(x: IntervalNode) -> IntervalNode:
    y = x.right
    assert y is not None
    x.right = y.left
    y.left = x
    x.refresh()
    y.refresh()
    return y


def _rebalance(node: IntervalNode, low: int) -> IntervalNode:
    balance = _height(node.left) - _height(node.right)
    if balance > 1 and node.left is not None:
        if low < node.left.low:
            return _rotate_right(node)
        if low > node.left.low:
            node.left = _rotate_left(node.left)
            return _rotate_right(node)
    if balance < -1 and node.right is not None:
        if low > node.right.low:
            return _rotate_left(node)
        if low < node.right.low:
            node.right = _rotate_right(node.right)
            return _rotate_left(node)
    return node


class IntervalTree:
    """AVL tree of disjoint intervals.

    With ``half_open`` the intervals are ``[low, high)`` and adjacent ones
    may touch; otherwise they are closed ``[low, high]``. When ``capacity``
    is reached the tree is emptied before the next insertion. The
    ``reserved`` intervals are inserted whenever the tree is (re)set.
    """

    def __init__(
        self,
        half_open: bool = False,
        capacity: Optional[int] = None,
        reserved: Iterable[Tuple[int, int]] = (),
    ) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be positive")
        self.half_open = half_open
        self.capacity = capacity
        self._reserved: Tuple[Tuple[int, int], ...] = tuple(
            (int(low), int(high)) for low, high in reserved
        )
        self.root: Optional[IntervalNode] = None
        self._count = 0
        self.reset()

    def _goes_left(self, node: IntervalNode, low: int, high: int) -> bool:
        return high <= node.low if self.half_open else high < node.low

    def _goes_right(self, node: IntervalNode, low: int, high: int) -> bool:
        return low >= node.high if self.half_open else low > node.high

    def _insert(self, node: Optional[IntervalNode], low: int, high: int) -> IntervalNode:
        if node is None:
            self._count += 1
            return IntervalNode(low, high)
        if self._goes_left(node, low, high):
            node.left = self._insert(node.left, low, high)
        elif self._goes_right(node, low, high):
            node.right = self._insert(node.right, low, high)
        else:
            raise IntervalOverlapError(low, high)
        node.refresh()
        return _rebalance(node, low)

    def reset(self) -> None:
        """Empty the tree and re-insert the reserved intervals."""
        self.root = None
        self._count = 0
        for low, high in self._reserved:
            self.root = self._insert(self.root, low, high)

    def insert(self, low: int, high: int) -> None:
        """Add an interval; raise IntervalOverlapError if it overlaps."""
        if self.half_open and low == high:
            logger.warning("inserting empty interval [%#x, %#x)", low, high)
        if self.capacity is not None and self._count >= self.capacity:
            self.reset()
            logger.info("interval tree reached %d nodes, reset", self.capacity)
        self.root = self._insert(self.root, low, high)

    def overlaps(self, low: int, high: int) -> bool:
        """Tell whether the interval overlaps any interval in the tree."""
        node = self.root
        while node is not None:
            if self._goes_left(node, low, high):
                node = node.left
            elif self._goes_right(node, low, high):
                node = node.right
            else:
                return True
        return False

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(low, high)`` pairs in ascending order."""
        stack: list = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.low, node.high
            node = node.right

    def preorder(self) -> Iterator[IntervalNode]:
        """Yield nodes root first, then the left and right subtrees."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def render(self, indent: int = 0) -> str:
        """Draw the tree sideways, rightmost interval on the first line."""
        parts: list = []

        def fmt(node: IntervalNode) -> str:
            if self.half_open:
                return f"[{node.low:#x}, {node.high:#x}]"
            return f"[{node.low}, {node.high}]"

        def walk(node: Optional[IntervalNode], space: int) -> None:
            if node is None:
                return
            space += LEVEL_GAP
            walk(node.right, space)
            parts.append("\n" + " " * (space - LEVEL_GAP) + "|-- " + fmt(node) + "\n")
            walk(node.left, space)

        walk(self.root, indent)
        return "".join(parts)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build a small demonstration tree and print it."""
    intervals = [(15, 16), (17, 19), (21, 22), (33, 43), (5, 10)]
    tree = IntervalTree()
    for low, high in intervals:
        tree.insert(low, high)

    out = sys.stdout
    out.write("Preorder traversal of the constructed Interval Tree is\n")
    for node in tree.preorder():
        out.write(f"[{node.low}, {node.high}] max = {node.max_high:#x} \n")

    if tree.overlaps(13, 15):
        out.write("\nInterval overlaps with existing intervals.\n")
    else:
        out.write("\nInterval does not overlap with existing intervals.\n")

    out.write("Visual representation of the Interval Tree:\n")
    out.write(tree.render(0))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())