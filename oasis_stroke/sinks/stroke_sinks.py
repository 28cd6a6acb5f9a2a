################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Renderer sink interfaces notified by the stroke processor."""

from __future__ import annotations

from typing import Protocol
from typing import runtime_checkable

import numpy as np

from oasis_stroke.stroke_types import StrokeOutput
from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


class StrokeWindowView:
    """Read-only view of the processing window.

    The view reads through to the live window, so it reflects later updates.
    Sinks that need to keep the contents must copy them, for example with
    points() or positions().
    """

    def __init__(
        self, points: RingBuffer[StrokePoint], indices: RingBuffer[int]
    ) -> None:
        self._points: RingBuffer[StrokePoint] = points
        self._indices: RingBuffer[int] = indices

    def __len__(self) -> int:
        return len(self._points)

    @property
    def capacity(self) -> int:
        """Return the capacity of the window."""
        return self._points.capacity

    def point_from_end(self, offset: int) -> StrokePoint:
        """Return a copy of the point at an offset from the newest sample."""
        return self._points.get_from_end(offset).copy()

    def index_from_end(self, offset: int) -> int:
        """Return the stroke index at an offset from the newest sample."""
        return self._indices.get_from_end(offset)

    def points(self) -> list[StrokePoint]:
        """Return copies of the points from oldest to newest."""
        return [point.copy() for point in self._points.iter_time_order()]

    def indices(self) -> list[int]:
        """Return the stroke indices from oldest to newest."""
        return self._indices.iter_time_order()

    def positions(self) -> np.ndarray:
        """Return the positions from oldest to newest as an (N, 3) array."""
        if self._points.is_empty():
            return np.zeros((0, 3), dtype=np.float64)
        return np.stack(
            [point.position for point in self._points.iter_time_order()], axis=0
        )


@runtime_checkable
class StrokeBufferSink(Protocol):
    """Consumer of the live window preview.

    Sinks are called synchronously from the stroke processor and must not
    call back into it.
    """

    def on_stroke_begin(self) -> None: ...

    def on_window_update(self, window: StrokeWindowView) -> None: ...

    def on_stroke_end(self) -> None: ...


@runtime_checkable
class StrokeOutputSink(Protocol):
    """Consumer of the finalized stroke output.

    ``on_output_update`` receives the growing output and the window capacity.
    Only the trailing ``window_capacity - 1`` entries may still be revised.
    Sinks are called synchronously from the stroke processor and must not
    call back into it.
    """

    def on_actualization_begin(self) -> None: ...

    def on_output_update(self, output: StrokeOutput, window_capacity: int) -> None: ...

    def on_actualization_end(self) -> None: ...
