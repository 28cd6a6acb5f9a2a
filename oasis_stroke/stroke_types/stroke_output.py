################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Append-only finalized stroke output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterator
from typing import overload

import numpy as np

from oasis_stroke.stroke_types.stroke_point import StrokePoint


class StrokeOutputError(Exception):
    """Raised when the finalized output is mutated against its contract."""


class StrokeOutput(Sequence[StrokePoint]):
    """Growing sequence of finalized stroke points for one actualization.

    Consumers see a read-only sequence. Only the stroke processor appends to
    or revises entries, and only entries inside the trailing window are ever
    revised. Once the actualization ends the output is closed and never
    changes again.
    """

    def __init__(self) -> None:
        """Initialize an empty output."""
        self._points: list[StrokePoint] = []
        self._closed: bool = False
        self._revision_count: int = 0

    @overload
    def __getitem__(self, index: int) -> StrokePoint: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[StrokePoint]: ...

    def __getitem__(self, index: int | slice) -> StrokePoint | Sequence[StrokePoint]:
        if isinstance(index, slice):
            return tuple(self._points[index])
        return self._points[index]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[StrokePoint]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"StrokeOutput(length={len(self._points)}, closed={self._closed})"

    @property
    def closed(self) -> bool:
        """Return True once no further revisions can happen."""
        return self._closed

    @property
    def revision_count(self) -> int:
        """Return how many times an existing entry was overwritten."""
        return self._revision_count

    def frozen_length(self, window_capacity: int) -> int:
        """Return the length of the prefix that can no longer be revised.

        Args:
            window_capacity: Capacity of the processing window that feeds this
                output

        Returns:
            Number of leading entries guaranteed to stay unchanged
        """
        if self._closed:
            return len(self._points)
        return max(0, len(self._points) - max(0, window_capacity - 1))

    def positions(self) -> np.ndarray:
        """Return the positions as an (N, 3) array."""
        if not self._points:
            return np.zeros((0, 3), dtype=np.float64)
        return np.stack([point.position for point in self._points], axis=0)

    def append_point(self, point: StrokePoint) -> None:
        """Append a new entry."""
        self._require_open()
        self._points.append(point)

    def revise_point(self, index: int, point: StrokePoint) -> None:
        """Overwrite an existing entry."""
        self._require_open()
        if index < 0 or index >= len(self._points):
            raise StrokeOutputError(
                f"Index {index} out of range for length {len(self._points)}"
            )
        self._points[index] = point
        self._revision_count += 1

    def close(self) -> None:
        """Mark the output as final."""
        self._closed = True

    def _require_open(self) -> None:
        if self._closed:
            raise StrokeOutputError("Output is closed; actualization has ended")
