"""MurmurHash64A and a Bloom filter built on it."""

from __future__ import annotations

import random
from typing import Optional, Sequence

_MASK64 = 0xFFFFFFFFFFFFFFFF
_M = 0xC6A4A7935BD1E995
_R = 47

DEFAULT_CAPACITY = 4096 * 8
DEFAULT_HASH_COUNT = 3


def murmurhash64a(key: bytes, seed: int) -> int:
    """Return the 64-bit MurmurHash64A of ``key`` (little-endian blocks)."""
    length = len(key)
    h = (seed ^ (length * _M)) & _MASK64

    block_end = length - (length & 7)
    for offset in range(0, block_end, 8):
        k = int.from_bytes(key[offset:offset + 8], "little")
        k = (k * _M) & _MASK64
        k ^= k >> _R
        k = (k * _M) & _MASK64
        h ^= k
        h = (h * _M) & _MASK64

    tail = key[block_end:]
    if tail:
        h ^= int.from_bytes(tail, "little")
        h = (h * _M) & _MASK64

    h ^= h >> _R
    h = (h * _M) & _MASK64
    h ^= h >> _R
    return h


def int_key(value: int) -> bytes:
    """Encode a 32-bit integer as the four little-endian bytes that are hashed."""
    return value.to_bytes(4, "little", signed=value < 0)


class BloomFilter:
    """Bit-array Bloom filter with ``hash_count`` seeded MurmurHash64A probes."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        hash_count: int = DEFAULT_HASH_COUNT,
        seeds: Optional[Sequence[int]] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        if hash_count < 1:
            raise ValueError("hash_count must be positive")
        if seeds is None:
            rng = random.Random()
            seeds = [rng.getrandbits(64) for _ in range(hash_count)]
        elif len(seeds) != hash_count:
            raise ValueError("one seed is needed per hash function")
        self.capacity = capacity
        self.hash_count = hash_count
        self.seeds = tuple(seed & _MASK64 for seed in seeds)
        self._bits = bytearray((capacity + 7) // 8)

    def _positions(self, key: bytes):
        for seed in self.seeds:
            yield murmurhash64a(key, seed) % self.capacity

    def add(self, key: bytes) -> None:
        """Set the bits for ``key``."""
        for n in self._positions(key):
            self._bits[n >> 3] |= 1 << (n & 7)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, bytearray)):
            return False
        return all(
            self._bits[n >> 3] & (1 << (n & 7)) for n in self._positions(bytes(key))
        )