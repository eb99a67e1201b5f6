import pytest
from hypothesis import given, strategies as st

from tagkit.fragments import (
    PAGE_SIZE,
    PARTIAL,
    RELEASABLE,
    UnmapRange,
    is_aligned,
    min_chunks_per_page,
    round_down_to,
    round_up_to,
    scan_and_unmap,
    unmap_fragment_region,
)

REGION = 0x10000000
CHUNKS = 240


@given(st.integers(min_value=0, max_value=2**48), st.integers(min_value=0, max_value=20))
def test_rounding_brackets_value(value, shift):
    boundary = 1 << shift
    down = round_down_to(value, boundary)
    up = round_up_to(value, boundary)
    assert down <= value < down + boundary
    assert value <= up < value + boundary
    assert is_aligned(down, boundary)
    assert is_aligned(up, boundary)


def test_rounding_to_page():
    assert round_up_to(PAGE_SIZE, PAGE_SIZE) == PAGE_SIZE
    assert round_up_to(1, PAGE_SIZE) == PAGE_SIZE
    assert round_down_to(PAGE_SIZE + 1, PAGE_SIZE) == PAGE_SIZE
    assert not is_aligned(PAGE_SIZE + 1, PAGE_SIZE)


@given(st.integers(min_value=1, max_value=3 * PAGE_SIZE))
def test_min_chunks_per_page_spans_a_page(chunk_size):
    n = min_chunks_per_page(chunk_size)
    if chunk_size >= PAGE_SIZE:
        assert n == 1
    else:
        assert n * chunk_size >= PAGE_SIZE
        assert (n - 1) * chunk_size < PAGE_SIZE


def test_min_chunks_rejects_zero_chunk():
    with pytest.raises(ValueError):
        min_chunks_per_page(0)


def test_full_region_with_odd_chunk_size():
    chunk_size = 2048 + 0x10
    states = bytearray([0b11] * CHUNKS)
    results = scan_and_unmap(REGION, states, chunk_size)
    assert len(results) == 1
    found = results[0]
    assert found.begin == REGION
    assert found.end == round_down_to(REGION + CHUNKS * chunk_size, PAGE_SIZE)
    assert found.first_chunk == 0
    assert found.first_complete
    assert found.last_chunk == 238
    assert not found.last_complete
    assert all(state == 0 for state in states[: found.last_chunk])
    assert states[found.last_chunk] & PARTIAL
    assert states[239] == 0b11
    assert found.unmapped == found.last_chunk

    snapshot = bytes(states)
    assert scan_and_unmap(REGION, states, chunk_size) == []
    assert bytes(states) == snapshot


def test_page_sized_chunks_release_everything():
    states = [0b11] * CHUNKS
    results = scan_and_unmap(REGION, states, PAGE_SIZE)
    assert results == [
        UnmapRange(
            begin=REGION,
            end=REGION + CHUNKS * PAGE_SIZE,
            first_chunk=0,
            last_chunk=CHUNKS - 1,
            first_complete=True,
            last_complete=True,
            unmapped=CHUNKS,
        )
    ]
    assert states == [0] * CHUNKS
    assert "[0-239]" in str(results[0])


def test_unaligned_region_leaves_partial_ends():
    region = REGION + 0x800
    states = [0b11] * 4
    results = scan_and_unmap(region, states, PAGE_SIZE)
    assert len(results) == 1
    found = results[0]
    assert is_aligned(found.begin, PAGE_SIZE)
    assert is_aligned(found.end, PAGE_SIZE)
    assert region <= found.begin < found.end <= region + 4 * PAGE_SIZE
    assert states[1] == 0 and states[2] == 0
    assert states[0] & PARTIAL and states[0] & RELEASABLE
    assert states[3] & PARTIAL and states[3] & RELEASABLE
    assert not found.first_complete and not found.last_complete
    assert found.unmapped == 2
    assert str(found).startswith("Unmapping ")

    snapshot = list(states)
    assert scan_and_unmap(region, states, PAGE_SIZE) == []
    assert states == snapshot


def test_short_run_is_skipped():
    states = [0] * 16
    states[5] = states[6] = 0b11
    snapshot = list(states)
    assert scan_and_unmap(REGION, states, 1024) == []
    assert states == snapshot


def test_run_of_partial_chunks_is_skipped():
    states = [PARTIAL | 0b01] * 10
    snapshot = list(states)
    result = unmap_fragment_region(REGION, states, PAGE_SIZE, 1, 0, 10)
    assert result is None
    assert states == snapshot


def test_run_ending_at_region_end_is_scanned():
    states = [0] * 8 + [0b11] * 8
    results = scan_and_unmap(REGION, states, PAGE_SIZE)
    assert [(r.first_chunk, r.last_chunk) for r in results] == [(8, 15)]
    assert states == [0] * 16