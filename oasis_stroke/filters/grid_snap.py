################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Snap stroke positions onto a regular grid."""

from __future__ import annotations

import numpy as np

from oasis_stroke.filters.stroke_filter import StrokeFilterError
from oasis_stroke.filters.stroke_filter import validate_neighborhood
from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


# Default grid spacing in meters
DEFAULT_STEP_M: float = 0.001


class GridSnapFilter:
    """Round the newest ``neighborhood + 1`` positions to multiples of a step."""

    def __init__(self, step_m: float = DEFAULT_STEP_M, neighborhood: int = 0) -> None:
        """Initialize the filter with a grid step in meters."""
        step: float = float(step_m)
        if not np.isfinite(step) or step <= 0.0:
            raise StrokeFilterError("step_m must be finite and positive")
        self._step_m: float = step
        self._neighborhood: int = validate_neighborhood(neighborhood, "neighborhood")

    def __repr__(self) -> str:
        return (
            f"GridSnapFilter(step_m={self._step_m}, "
            f"neighborhood={self._neighborhood})"
        )

    @property
    def step_m(self) -> float:
        """Return the grid step in meters."""
        return self._step_m

    def required_neighborhood(self) -> int:
        """Return the number of neighbors needed on each side."""
        return self._neighborhood

    def reset(self) -> None:
        """Nothing is cached between strokes."""

    def process(
        self, points: RingBuffer[StrokePoint], indices: RingBuffer[int]
    ) -> None:
        """Snap the newest samples of the window in place."""
        for offset in range(min(len(points), self._neighborhood + 1)):
            point: StrokePoint = points.get_from_end(offset)
            point.position = self.snap(point.position)

    def snap(self, position: np.ndarray) -> np.ndarray:
        """Return the grid point nearest to a position."""
        return np.round(position / self._step_m) * self._step_m
