"""Red-black tree of integer keys."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Optional


class Color(enum.Enum):
    """Colour of a red-black tree node."""

    RED = "red"
    BLACK = "black"


@dataclass(eq=False)
class RBNode:
    """A tree node with links to its children and parent."""

    data: int
    color: Color = Color.RED
    left: Optional["RBNode"] = None
    right: Optional["RBNode"] = None
    parent: Optional["RBNode"] = None


def _is_black(node: Optional[RBNode]) -> bool:
    return node is None or node.color is Color.BLACK


def _minimum(node: RBNode) -> RBNode:
    while node.left is not None:
        node = node.left
    return node


class RedBlackTree:
    """Balanced binary search tree; equal keys are kept and go to the right."""

    def __init__(self) -> None:
        self.root: Optional[RBNode] = None
        self._count = 0

    def _rotate_left(self, x: RBNode) -> None:
        y = x.right
        assert y is not None
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is None:
            self.root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _rotate_right(self, y: RBNode) -> None:
        x = y.left
        assert x is not None
        y.left = x.right
        if x.right is not None:
            x.right.parent = y
        x.parent = y.parent
        if y.parent is None:
            self.root = x
        elif y is y.parent.right:
            y.parent.right = x
        else:
            y.parent.left = x
        x.right = y
        y.parent = x

    def _insert_fixup(self, z: RBNode) -> None:
        while z is not self.root and z.parent.color is Color.RED:
            parent = z.parent
            grand = parent.parent
            if parent is grand.left:
                uncle = grand.right
                if uncle is not None and uncle.color is Color.RED:
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grand.color = Color.RED
                    z = grand
                else:
                    if z is parent.right:
                        z = parent
                        self._rotate_left(z)
                    z.parent.color = Color.BLACK
                    z.parent.parent.color = Color.RED
                    self._rotate_right(z.parent.parent)
            else:
                uncle = grand.left
                if uncle is not None and uncle.color is Color.RED:
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grand.color = Color.RED
                    z = grand
                else:
                    if z is parent.left:
                        z = parent
                        self._rotate_right(z)
                    z.parent.color = Color.BLACK
                    z.parent.parent.color = Color.RED
                    self._rotate_left(z.parent.parent)
        assert self.root is not None
        self.root.color = Color.BLACK

    def insert(self, data: int) -> RBNode:
        """Add a key and return its node."""
        z = RBNode(data)
        parent: Optional[RBNode] = None
        node = self.root
        while node is not None:
            parent = node
            node = node.left if z.data < node.data else node.right
        z.parent = parent
        if parent is None:
            self.root = z
        elif z.data < parent.data:
            parent.left = z
        else:
            parent.right = z
        self._count += 1
        self._insert_fixup(z)
        return z

    def search(self, key: int) -> Optional[RBNode]:
        """Return a node holding ``key``, or None."""
        node = self.root
        while node is not None and node.data != key:
            node = node.right if node.data < key else node.left
        return node

    def __contains__(self, key: object) -> bool:
        return isinstance(key, int) and self.search(key) is not None

    def _transplant(self, u: RBNode, v: Optional[RBNode]) -> None:
        if u.parent is None:
            self.root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        if v is not None:
            v.parent = u.parent

    def _delete_fixup(self, x: Optional[RBNode], x_parent: Optional[RBNode]) -> None:
        while x is not self.root and _is_black(x):
            assert x_parent is not None
            if x is x_parent.left:
                w = x_parent.right
                if w.color is Color.RED:
                    w.color = Color.BLACK
                    x_parent.color = Color.RED
                    self._rotate_left(x_parent)
                    w = x_parent.right
                if _is_black(w.left) and _is_black(w.right):
                    w.color = Color.RED
                    x = x_parent
                    x_parent = x.parent
                else:
                    if _is_black(w.right):
                        if w.left is not None:
                            w.left.color = Color.BLACK
                        w.color = Color.RED
                        self._rotate_right(w)
                        w = x_parent.right
                    w.color = x_parent.color
                    x_parent.color = Color.BLACK
                    if w.right is not None:
                        w.right.color = Color.BLACK
                    self._rotate_left(x_parent)
                    x = self.root
            else:
                w = x_parent.left
                if w.color is Color.RED:
                    w.color = Color.BLACK
                    x_parent.color = Color.RED
                    self._rotate_right(x_parent)
                    w = x_parent.left
                if _is_black(w.right) and _is_black(w.left):
                    w.color = Color.RED
                    x = x_parent
                    x_parent = x.parent
                else:
                    if _is_black(w.left):
                        if w.right is not None:
                            w.right.color = Color.BLACK
                        w.color = Color.RED
                        self._rotate_left(w)
                        w = x_parent.left
                    w.color = x_parent.color
                    x_parent.color = Color.BLACK
                    if w.left is not None:
                        w.left.color = Color.BLACK
                    self._rotate_right(x_parent)
                    x = self.root
        if x is not None:
            x.color = Color.BLACK

    def delete(self, key: int) -> bool:
        """Remove one node holding ``key``; return False if there is none."""
        z = self.search(key)
        if z is None:
            return False

        y = z
        original_color = y.color
        if z.left is None:
            x = z.right
            x_parent = z.parent
            self._transplant(z, z.right)
        elif z.right is None:
            x = z.left
            x_parent = z.parent
            self._transplant(z, z.left)
        else:
            y = _minimum(z.right)
            original_color = y.color
            x = y.right
            if y.parent is z:
                x_parent = y
            else:
                x_parent = y.parent
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.color = z.color
        z.left = z.right = z.parent = None
        self._count -= 1

        if original_color is Color.BLACK:
            self._delete_fixup(x, x_parent)
        return True

    def __iter__(self) -> Iterator[int]:
        """Yield keys in ascending order."""
        stack: list = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.data
            node = node.right

    def __len__(self) -> int:
        return self._count