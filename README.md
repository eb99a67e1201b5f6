# tagkit

Plain-Python data structures and helpers for experimenting with tagged memory
allocators. No third-party libraries are needed.

## Modules

- `tagkit.intervaltree`: `IntervalTree`, a self-balancing (AVL) tree of
  disjoint intervals. Intervals are closed `[low, high]` by default, or
  half-open `[low, high)` with `half_open=True`, in which case adjacent
  intervals may touch. `insert` raises `IntervalOverlapError` when the new
  interval overlaps one already in the tree; `overlaps` answers the same
  question without inserting. With `capacity` set, the tree is emptied before
  an insertion once it holds that many nodes; `reserved` intervals are
  inserted again every time the tree is reset (`reset`). Iterating yields
  `(low, high)` pairs in ascending order, `preorder` yields `IntervalNode`
  objects root first, and `render` draws the tree sideways as text.
- `tagkit.ranges`: `generate_non_overlapping_ranges` draws random `Range`
  values that overlap neither each other nor a reserved stack area;
  `write_ranges` and `read_ranges` store them as one decimal `low high` pair
  per line (reading stops at the first malformed pair); `time_insertions`
  inserts ranges into an `IntervalTree` and returns the elapsed milliseconds.
- `tagkit.rbtree`: `RedBlackTree` of integers with `insert`, `delete` (returns
  `False` when the key is absent), `search` (returns an `RBNode` or `None`),
  `in`, `len` and ascending iteration. Equal keys are kept.
- `tagkit.bloom`: `murmurhash64a`, the 64-bit MurmurHash2 of a byte string
  with a seed, and `BloomFilter`, a bit-array filter with `capacity` bits and
  `hash_count` seeded probes (random seeds unless given). `int_key` turns an
  integer into the four little-endian bytes the filter hashes.
- `tagkit.fragments`: planning which page-aligned spans of a chunked region
  can be released. Each chunk has a state value built from `LEFT_HALF`,
  `RIGHT_HALF` and `PARTIAL`; zero means the chunk cannot be released.
  `scan_and_unmap` finds every run of non-zero states, trims it to page
  boundaries with `unmap_fragment_region`, updates the states in place and
  returns the chosen spans as `UnmapRange` values. Helpers: `round_up_to`,
  `round_down_to`, `is_aligned`, `min_chunks_per_page`.
- `tagkit.queues`: `CircularQueue`, a FIFO ring buffer whose capacity must be
  a power of two, with `enqueue`, `dequeue`, `peek`, `is_empty`, `is_full`,
  `len` and front-to-rear iteration. It raises `QueueFullError` and
  `QueueEmptyError`.
- `tagkit.linkedlist`: `LinkedList`, a lock-guarded collection that keeps the
  newest item first, with `add`, `remove` (returns whether an item was
  removed), `clear`, `len` and iteration over a snapshot.
- `tagkit.rotation`: `rotate_nonzero` returns a copy of a sequence in which
  every non-zero entry moves to the position of the next non-zero entry, the
  last one wrapping round to the first; zeros stay in place.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from tagkit.intervaltree import IntervalTree, IntervalOverlapError

tree = IntervalTree()
tree.insert(0x10, 0x20)
tree.insert(0x30, 0x40)
tree.overlaps(0x18, 0x1C)      # True
tree.overlaps(0x22, 0x28)      # False
try:
    tree.insert(0x15, 0x25)
except IntervalOverlapError:
    pass
print(tree.render(0))
```

```python
from tagkit.rbtree import RedBlackTree

tree = RedBlackTree()
for value in (10, 20, 30, 15, 25):
    tree.insert(value)
tree.delete(20)
list(tree)                     # [10, 15, 25, 30]
20 in tree                     # False
```

```python
from tagkit.bloom import BloomFilter, int_key

bloom = BloomFilter(1500, 3)
bloom.add(int_key(7))
int_key(7) in bloom            # True
```

```python
from tagkit.queues import CircularQueue

queue = CircularQueue(8)
queue.enqueue("a")
queue.enqueue("b")
queue.dequeue()                # "a"
len(queue)                     # 1
```

```python
from tagkit.rotation import rotate_nonzero

rotate_nonzero([0, 2, 0, 4, 0, 6])   # [0, 6, 0, 2, 0, 4]
```

## Commands

```
tagkit-intervals
```

builds a small interval tree, prints its nodes in preorder, whether
`[13, 15]` overlaps any of them, and a drawing of the tree.

```
tagkit-ranges generate [--count N] [--output FILE] [--seed S]
tagkit-ranges time [--input FILE]
```

`generate` writes `N` random non-overlapping ranges (default 10,000,000) to
`FILE` (default `ranges.txt`); `--seed` makes the output repeatable. `time`
reads ranges from `FILE`, inserts them into an interval tree that holds at
most 5000 nodes before it is reset, and prints how many milliseconds that
took. It exits with status 1 when the file cannot be opened or holds no
ranges.

## What it does not do

`tagkit.fragments` only computes which address spans could be released and
records that in the state table; it does not map, unmap or otherwise touch
memory. Likewise none of the modules allocate or tag real memory: they are
the bookkeeping structures alone.