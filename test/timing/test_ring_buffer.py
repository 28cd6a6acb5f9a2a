################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the fixed-capacity ring buffer."""

from __future__ import annotations

import pytest

from oasis_stroke.timing.ring_buffer import RingBuffer
from oasis_stroke.timing.ring_buffer import RingBufferCapacityError
from oasis_stroke.timing.ring_buffer import RingBufferError
from oasis_stroke.timing.ring_buffer import RingBufferIndexError


@pytest.mark.parametrize("capacity", [0, -1])
def test_rejects_non_positive_capacity(capacity: int) -> None:
    """Ensure construction fails for capacities below one."""
    with pytest.raises(RingBufferCapacityError):
        RingBuffer(capacity)


def test_rejects_non_int_capacity() -> None:
    """Ensure bool and float capacities are rejected."""
    with pytest.raises(RingBufferCapacityError):
        RingBuffer(True)
    with pytest.raises(RingBufferCapacityError):
        RingBuffer(2.0)  # type: ignore[arg-type]


def test_errors_share_base_class() -> None:
    """Ensure the error kinds derive from the module error and builtins."""
    assert issubclass(RingBufferCapacityError, RingBufferError)
    assert issubclass(RingBufferCapacityError, ValueError)
    assert issubclass(RingBufferIndexError, RingBufferError)
    assert issubclass(RingBufferIndexError, IndexError)


def test_reverse_order_when_full() -> None:
    """Ensure offsets from the end read values in reverse insertion order."""
    buffer: RingBuffer[str] = RingBuffer(4)
    for value in ["a", "b", "c", "d"]:
        buffer.push(value)
    assert len(buffer) == 4
    assert buffer.is_full()
    assert [buffer.get_from_end(offset) for offset in range(4)] == [
        "d",
        "c",
        "b",
        "a",
    ]


def test_push_when_full_evicts_oldest() -> None:
    """Ensure one more push evicts exactly the oldest value."""
    buffer: RingBuffer[int] = RingBuffer(3)
    for value in [1, 2, 3, 4]:
        buffer.push(value)
    assert len(buffer) == 3
    assert buffer.iter_time_order() == [2, 3, 4]
    assert buffer.earliest() == 2
    assert buffer.latest() == 4


def test_wraparound_many_times() -> None:
    """Ensure addressing stays correct after many wraparounds."""
    buffer: RingBuffer[int] = RingBuffer(5)
    for value in range(103):
        buffer.push(value)
    assert list(buffer.iter_from_end()) == [102, 101, 100, 99, 98]


def test_partial_fill_reads() -> None:
    """Ensure a partially filled buffer reports its logical length."""
    buffer: RingBuffer[int] = RingBuffer(5)
    buffer.push(10)
    buffer.push(20)
    assert len(buffer) == 2
    assert not buffer.is_full()
    assert buffer.get_from_end(0) == 20
    assert buffer.get_from_end(1) == 10
    with pytest.raises(RingBufferIndexError):
        buffer.get_from_end(2)


def test_out_of_range_offsets() -> None:
    """Ensure negative and too-large offsets raise for reads and writes."""
    buffer: RingBuffer[int] = RingBuffer(2)
    with pytest.raises(RingBufferIndexError):
        buffer.get_from_end(0)
    buffer.push(1)
    with pytest.raises(RingBufferIndexError):
        buffer.get_from_end(-1)
    with pytest.raises(RingBufferIndexError):
        buffer.set_from_end(1, 5)


def test_set_from_end_overwrites_in_place() -> None:
    """Ensure writes address the same slot as reads."""
    buffer: RingBuffer[int] = RingBuffer(3)
    for value in [1, 2, 3, 4]:
        buffer.push(value)
    buffer.set_from_end(2, 20)
    buffer.set_from_end(0, 40)
    assert buffer.iter_time_order() == [20, 3, 40]
    assert len(buffer) == 3


def test_clear_keeps_capacity() -> None:
    """Ensure clearing resets the length but keeps the capacity."""
    buffer: RingBuffer[int] = RingBuffer(3)
    buffer.push(1)
    buffer.push(2)
    buffer.clear()
    assert len(buffer) == 0
    assert buffer.is_empty()
    assert buffer.capacity == 3
    assert buffer.latest() is None
    assert buffer.earliest() is None
    buffer.push(7)
    assert buffer.iter_time_order() == [7]
