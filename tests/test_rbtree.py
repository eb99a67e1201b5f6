from typing import Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tagkit.rbtree import Color, RBNode, RedBlackTree


def black_height(node: Optional[RBNode]) -> int:
    """Check the red-black properties below ``node`` and return its black height."""
    if node is None:
        return 1
    for child in (node.left, node.right):
        if child is not None:
            assert child.parent is node
            if node.color is Color.RED:
                assert child.color is Color.BLACK
    if node.left is not None:
        assert node.left.data <= node.data
    if node.right is not None:
        assert node.right.data >= node.data
    left = black_height(node.left)
    right = black_height(node.right)
    assert left == right
    return left + (1 if node.color is Color.BLACK else 0)


def check_tree(tree: RedBlackTree) -> None:
    if tree.root is not None:
        assert tree.root.color is Color.BLACK
        assert tree.root.parent is None
    black_height(tree.root)


def test_source_example():
    tree = RedBlackTree()
    for value in (10, 20, 30, 15, 25):
        tree.insert(value)
    assert tree.delete(11) is False
    assert list(tree) == [10, 15, 20, 25, 30]
    found = tree.search(20)
    assert found is not None and found.data == 20
    assert 20 in tree
    check_tree(tree)


def test_empty_tree():
    tree = RedBlackTree()
    assert len(tree) == 0
    assert list(tree) == []
    assert tree.search(5) is None
    assert 5 not in tree
    assert tree.delete(5) is False


def test_delete_present_key():
    tree = RedBlackTree()
    for value in range(1, 21):
        tree.insert(value)
    assert tree.delete(7) is True
    assert 7 not in tree
    assert len(tree) == 19
    assert list(tree) == [v for v in range(1, 21) if v != 7]
    check_tree(tree)


def test_duplicates_kept():
    tree = RedBlackTree()
    for value in (5, 5, 5):
        tree.insert(value)
    assert list(tree) == [5, 5, 5]
    tree.delete(5)
    assert list(tree) == [5, 5]
    check_tree(tree)


def test_sequential_insert_stays_balanced():
    tree = RedBlackTree()
    for value in range(1000):
        tree.insert(value)
    check_tree(tree)

    def depth(node):
        return 0 if node is None else 1 + max(depth(node.left), depth(node.right))

    assert depth(tree.root) <= 20


def test_non_int_not_contained():
    tree = RedBlackTree()
    tree.insert(1)
    assert "1" not in tree


@given(
    st.lists(st.integers(-1000, 1000), max_size=80),
    st.lists(st.integers(-1000, 1000), max_size=80),
)
def test_matches_sorted_multiset(inserts, deletes):
    tree = RedBlackTree()
    expected = []
    for value in inserts:
        tree.insert(value)
        expected.append(value)
    check_tree(tree)
    for value in deletes:
        removed = tree.delete(value)
        assert removed == (value in expected)
        if removed:
            expected.remove(value)
        check_tree(tree)
    assert list(tree) == sorted(expected)
    assert len(tree) == len(expected)


@pytest.mark.parametrize("order", [list(range(50)), list(range(50, 0, -1))])
def test_delete_all(order):
    tree = RedBlackTree()
    for value in order:
        tree.insert(value)
    for value in order:
        assert tree.delete(value) is True
        check_tree(tree)
    assert tree.root is None
    assert len(tree) == 0