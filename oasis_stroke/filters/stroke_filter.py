################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Filter interface for windowed stroke smoothing."""

from __future__ import annotations

import weakref
from typing import Any
from typing import Callable
from typing import Generic
from typing import Protocol
from typing import TypeVar
from typing import runtime_checkable

from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


class StrokeFilterError(Exception):
    """Raised when a stroke filter is configured with invalid arguments."""


@runtime_checkable
class StrokeFilter(Protocol):
    """Stateful in-place transform over the processing window.

    Filters are run in registration order on every stroke update. Each filter
    receives the whole window, addressed from the newest sample, together
    with the stroke index of every slot.

    Contract:
        - required_neighborhood() is the number of samples needed on each
          side of a sample to compute its final value. The processor sizes
          the window to the largest neighborhood plus one.
        - reset() clears internal state and is called when a stroke begins,
          after the window has been cleared. A filter shared by several
          processors must keep the state of windows still in use.
        - process() overwrites fields of the points in place. It must not
          replace slots and must give the same result when called again on
          an unchanged window.
        - process() must not call back into the stroke processor.
    """

    def required_neighborhood(self) -> int: ...

    def reset(self) -> None: ...

    def process(
        self, points: RingBuffer[StrokePoint], indices: RingBuffer[int]
    ) -> None: ...


def validate_neighborhood(value: object, name: str) -> int:
    """Return a validated non-negative neighborhood size."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise StrokeFilterError(f"{name} must be an int")
    if value < 0:
        raise StrokeFilterError(f"{name} must be non-negative")
    return value


def evict_stale(cache: dict[int, Any], indices: RingBuffer[int]) -> None:
    """Drop cached entries for stroke indices older than the window."""
    oldest: int | None = indices.earliest()
    if oldest is None:
        cache.clear()
        return
    for stroke_index in [key for key in cache if key < oldest]:
        del cache[stroke_index]


S = TypeVar("S")


class WindowStates(Generic[S]):
    """Filter state kept separately for every window a filter processes.

    Filters are referenced rather than owned, so one instance may serve
    several processors. State is looked up by the window's stroke index
    buffer, which each processor owns, and is dropped when that buffer is
    garbage collected.
    """

    def __init__(self, factory: Callable[[], S]) -> None:
        self._factory: Callable[[], S] = factory
        self._states: weakref.WeakKeyDictionary[RingBuffer[int], S] = (
            weakref.WeakKeyDictionary()
        )

    def __len__(self) -> int:
        return len(self._states)

    def for_window(self, indices: RingBuffer[int]) -> S:
        """Return the state for a window, creating it on first use."""
        state: S | None = self._states.get(indices)
        if state is None:
            state = self._factory()
            self._states[indices] = state
        return state

    def reset_empty(self) -> None:
        """Drop the state of windows that were cleared for a new stroke.

        Windows still holding samples belong to strokes in progress and keep
        their state.
        """
        for indices in [key for key in self._states.keys() if key.is_empty()]:
            del self._states[indices]
