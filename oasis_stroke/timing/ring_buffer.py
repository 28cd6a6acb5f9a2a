################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fixed-capacity ring buffer addressed from the newest element."""

from __future__ import annotations

from typing import Generic
from typing import Iterator
from typing import Optional
from typing import TypeVar


T = TypeVar("T")


class RingBufferError(Exception):
    """Raised when ring buffer operations fail."""


class RingBufferCapacityError(RingBufferError, ValueError):
    """Raised when a ring buffer is constructed with an invalid capacity."""


class RingBufferIndexError(RingBufferError, IndexError):
    """Raised when an offset falls outside the stored items."""


class RingBuffer(Generic[T]):
    """Circular store of the most recent items.

    The backing list is allocated once at construction. Pushing into a full
    buffer overwrites the oldest slot. Items are addressed by their offset
    from the newest item, so offset 0 is the item pushed last.

    Offsets at or beyond the logical length are programming errors and raise
    RingBufferIndexError.
    """

    def __init__(self, capacity: int) -> None:
        """Initialize the ring buffer with a fixed capacity."""
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise RingBufferCapacityError("Capacity must be an int")
        if capacity < 1:
            raise RingBufferCapacityError("Capacity must be positive")
        self._capacity: int = capacity
        self._slots: list[Optional[T]] = [None] * capacity
        # Slot that receives the next push
        self._head: int = 0
        self._length: int = 0

    def __len__(self) -> int:
        """Return the number of items stored."""
        return self._length

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self._capacity}, length={self._length})"

    @property
    def capacity(self) -> int:
        """Return the fixed capacity."""
        return self._capacity

    def is_empty(self) -> bool:
        """Return True if the buffer is empty."""
        return self._length == 0

    def is_full(self) -> bool:
        """Return True if the next push overwrites the oldest item."""
        return self._length == self._capacity

    def clear(self) -> None:
        """Forget all items while keeping the allocated slots."""
        for slot in range(self._capacity):
            self._slots[slot] = None
        self._head = 0
        self._length = 0

    def push(self, value: T) -> None:
        """Append a value, overwriting the oldest item when full."""
        self._slots[self._head] = value
        self._head = (self._head + 1) % self._capacity
        if self._length < self._capacity:
            self._length += 1

    def get_from_end(self, offset: int) -> T:
        """Return the item at the given offset from the newest item."""
        slot: int = self._slot_from_end(offset)
        return self._slots[slot]  # type: ignore[return-value]

    def set_from_end(self, offset: int, value: T) -> None:
        """Overwrite the item at the given offset from the newest item."""
        slot: int = self._slot_from_end(offset)
        self._slots[slot] = value

    def latest(self) -> T | None:
        """Return the newest item, if any."""
        if self._length == 0:
            return None
        return self.get_from_end(0)

    def earliest(self) -> T | None:
        """Return the oldest item, if any."""
        if self._length == 0:
            return None
        return self.get_from_end(self._length - 1)

    def iter_from_end(self) -> Iterator[T]:
        """Yield items from newest to oldest."""
        for offset in range(self._length):
            yield self.get_from_end(offset)

    def iter_time_order(self) -> list[T]:
        """Return items from oldest to newest."""
        return [
            self.get_from_end(offset) for offset in range(self._length - 1, -1, -1)
        ]

    def _slot_from_end(self, offset: int) -> int:
        """Map an offset from the newest item to a backing slot."""
        if not isinstance(offset, int) or isinstance(offset, bool):
            raise RingBufferIndexError("Offset must be an int")
        if offset < 0 or offset >= self._length:
            raise RingBufferIndexError(
                f"Offset {offset} out of range for length {self._length}"
            )
        return (self._head - 1 - offset) % self._capacity
