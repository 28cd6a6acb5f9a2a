################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Taper stroke thickness at the start of a stroke."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

import numpy as np

from oasis_stroke.filters.stroke_filter import StrokeFilterError
from oasis_stroke.filters.stroke_filter import WindowStates
from oasis_stroke.filters.stroke_filter import evict_stale
from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


# Number of samples over which a stroke grows to full thickness
DEFAULT_TAPER_SAMPLES: int = 8

# Thickness scale applied to the first sample of a stroke
DEFAULT_MIN_SCALE: float = 0.2


@dataclass
class _TaperState:
    """Taper progress of the stroke in one window."""

    first_index: int | None = None
    # Stroke index -> size before tapering
    tapered: dict[int, float] = field(default_factory=dict)


class ThicknessTaperFilter:
    """Scale the size of the first samples of a stroke.

    The scale grows linearly from ``min_scale`` at the first sample of the
    stroke to 1.0 after ``taper_samples`` samples. Each sample is scaled once,
    when it is the newest sample in the window, so re-running the filter on
    an unchanged window leaves sizes untouched.
    """

    def __init__(
        self,
        taper_samples: int = DEFAULT_TAPER_SAMPLES,
        min_scale: float = DEFAULT_MIN_SCALE,
    ) -> None:
        if not isinstance(taper_samples, int) or isinstance(taper_samples, bool):
            raise StrokeFilterError("taper_samples must be an int")
        if taper_samples < 1:
            raise StrokeFilterError("taper_samples must be positive")
        scale: float = float(min_scale)
        if not np.isfinite(scale) or scale < 0.0 or scale > 1.0:
            raise StrokeFilterError("min_scale must be within [0, 1]")
        self._taper_samples: int = taper_samples
        self._min_scale: float = scale
        self._windows: WindowStates[_TaperState] = WindowStates(_TaperState)

    def __repr__(self) -> str:
        return (
            f"ThicknessTaperFilter(taper_samples={self._taper_samples}, "
            f"min_scale={self._min_scale})"
        )

    def required_neighborhood(self) -> int:
        """Only the newest sample is touched."""
        return 0

    def reset(self) -> None:
        """Restart the taper for a new stroke."""
        self._windows.reset_empty()

    def scale_for(self, samples_into_stroke: int) -> float:
        """Return the thickness scale for a sample position in the stroke."""
        if samples_into_stroke >= self._taper_samples:
            return 1.0
        fraction: float = samples_into_stroke / float(self._taper_samples)
        return self._min_scale + (1.0 - self._min_scale) * fraction

    def process(
        self, points: RingBuffer[StrokePoint], indices: RingBuffer[int]
    ) -> None:
        """Taper the newest sample if it has not been tapered yet."""
        if points.is_empty():
            return
        state: _TaperState = self._windows.for_window(indices)
        evict_stale(state.tapered, indices)

        stroke_index: int = indices.get_from_end(0)
        if stroke_index in state.tapered:
            return
        if state.first_index is None:
            state.first_index = stroke_index

        point: StrokePoint = points.get_from_end(0)
        state.tapered[stroke_index] = point.size
        point.size = point.size * self.scale_for(stroke_index - state.first_index)
