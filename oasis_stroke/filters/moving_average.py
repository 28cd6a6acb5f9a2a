################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Symmetric moving average over stroke positions."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

import numpy as np

from oasis_stroke.filters.stroke_filter import WindowStates
from oasis_stroke.filters.stroke_filter import evict_stale
from oasis_stroke.filters.stroke_filter import validate_neighborhood
from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


# Default number of neighbors averaged on each side of a sample
DEFAULT_NEIGHBORHOOD: int = 4


@dataclass
class _AverageEntry:
    """Bookkeeping for one stroke index inside the window.

    Attributes:
        input_position: Position the filter received for the sample
        output_position: Position the filter last wrote for the sample
        serial: Identifier of this input, unique within a window
        radius: Radius used for the last write, or -1 before the first write
        basis: Stroke indices and input serials behind the last write
    """

    input_position: np.ndarray
    output_position: np.ndarray
    serial: int
    radius: int = -1
    basis: tuple[tuple[int, int], ...] = ()


@dataclass
class _WindowAverages:
    """Cached averages for the samples of one window."""

    entries: dict[int, _AverageEntry] = field(default_factory=dict)
    next_serial: int = 0


class MovingAverageFilter:
    """Replace positions with the unweighted mean of their neighbors.

    For each of the newest ``neighborhood + 1`` samples the radius shrinks
    until it fits inside the window on both sides, then the position is
    overwritten with the mean of the ``1 + 2 * radius`` input positions.

    Input positions are cached per stroke index, so running the filter again
    on an unchanged window reproduces the same positions instead of averaging
    averages. A sample keeps the result of its widest radius for as long as
    the inputs behind that result are unchanged. Samples drifting toward the
    old edge of the window therefore stay smoothed.

    The cache is kept per window, so one filter can be shared by several
    processors.
    """

    def __init__(self, neighborhood: int = DEFAULT_NEIGHBORHOOD) -> None:
        """Initialize the filter with its neighborhood size."""
        self._neighborhood: int = validate_neighborhood(neighborhood, "neighborhood")
        self._windows: WindowStates[_WindowAverages] = WindowStates(_WindowAverages)

    def __repr__(self) -> str:
        return f"MovingAverageFilter(neighborhood={self._neighborhood})"

    def required_neighborhood(self) -> int:
        """Return the number of neighbors needed on each side."""
        return self._neighborhood

    def reset(self) -> None:
        """Forget cached inputs of windows cleared for a new stroke."""
        self._windows.reset_empty()

    def process(
        self, points: RingBuffer[StrokePoint], indices: RingBuffer[int]
    ) -> None:
        """Smooth the newest samples of the window in place."""
        length: int = len(points)
        if length != len(indices):
            raise ValueError("points and indices must have the same length")
        if length == 0:
            return
        window: _WindowAverages = self._windows.for_window(indices)
        entries: dict[int, _AverageEntry] = window.entries
        evict_stale(entries, indices)

        # Record inputs for samples that are new or were changed upstream
        for offset in range(length):
            stroke_index: int = indices.get_from_end(offset)
            point: StrokePoint = points.get_from_end(offset)
            entry: _AverageEntry | None = entries.get(stroke_index)
            if entry is None or not np.array_equal(
                point.position, entry.output_position
            ):
                entries[stroke_index] = _AverageEntry(
                    input_position=point.position.copy(),
                    output_position=point.position.copy(),
                    serial=window.next_serial,
                )
                window.next_serial += 1

        for offset in range(min(length - 1, self._neighborhood), -1, -1):
            stroke_index = indices.get_from_end(offset)
            entry = entries[stroke_index]
            radius: int = self._fit_radius(offset, length)
            if radius >= entry.radius or _basis_changed(entries, entry):
                basis: tuple[tuple[int, int], ...] = tuple(
                    (neighbor_index, entries[neighbor_index].serial)
                    for neighbor_index in (
                        indices.get_from_end(neighbor)
                        for neighbor in range(offset - radius, offset + radius + 1)
                    )
                )
                entry.output_position = _mean_of(entries, basis)
                entry.radius = radius
                entry.basis = basis
            points.get_from_end(offset).position = entry.output_position.copy()

    def _fit_radius(self, offset: int, length: int) -> int:
        """Shrink the radius until both sides fit inside the window."""
        radius: int = self._neighborhood
        while offset - radius < 0 or offset + radius > length - 1:
            radius -= 1
        return radius


def _basis_changed(entries: dict[int, _AverageEntry], entry: _AverageEntry) -> bool:
    """Return True when any input behind the last write was revised."""
    for stroke_index, serial in entry.basis:
        neighbor: _AverageEntry | None = entries.get(stroke_index)
        # Inputs that aged out of the window can no longer change
        if neighbor is not None and neighbor.serial != serial:
            return True
    return False


def _mean_of(
    entries: dict[int, _AverageEntry], basis: tuple[tuple[int, int], ...]
) -> np.ndarray:
    """Return the mean input position of the given stroke indices."""
    stacked: np.ndarray = np.stack(
        [entries[stroke_index].input_position for stroke_index, _ in basis],
        axis=0,
    )
    return np.mean(stacked, axis=0)
