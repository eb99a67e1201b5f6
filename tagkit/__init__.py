"""Interval trees, red-black trees, Bloom filters, ring queues and chunk unmapping planners."""

__version__ = "0.1.0"

__all__ = [
    "bloom",
    "fragments",
    "intervaltree",
    "linkedlist",
    "queues",
    "ranges",
    "rbtree",
    "rotation",
]