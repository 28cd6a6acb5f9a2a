################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the thickness taper filter."""

from __future__ import annotations

import numpy as np
import pytest

from oasis_stroke.filters import StrokeFilter
from oasis_stroke.filters import StrokeFilterError
from oasis_stroke.filters import ThicknessTaperFilter
from oasis_stroke.pipeline.stroke_processor import StrokeProcessor
from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


def _stream(
    stroke_filter: ThicknessTaperFilter, count: int, *, first_index: int = 0
) -> RingBuffer[StrokePoint]:
    """Push unit-size points one at a time and process after each push."""
    points: RingBuffer[StrokePoint] = RingBuffer(count)
    indices: RingBuffer[int] = RingBuffer(count)
    for offset in range(count):
        points.push(StrokePoint(position=np.zeros(3), size=1.0))
        indices.push(first_index + offset)
        stroke_filter.process(points, indices)
    return points


def test_implements_protocol() -> None:
    """Ensure the filter satisfies the filter protocol."""
    stroke_filter: ThicknessTaperFilter = ThicknessTaperFilter()
    assert isinstance(stroke_filter, StrokeFilter)
    assert stroke_filter.required_neighborhood() == 0


def test_rejects_invalid_arguments() -> None:
    """Ensure invalid taper lengths and scales are rejected."""
    with pytest.raises(StrokeFilterError):
        ThicknessTaperFilter(taper_samples=0)
    with pytest.raises(StrokeFilterError):
        ThicknessTaperFilter(min_scale=1.5)


def test_linear_taper() -> None:
    """Ensure sizes grow linearly to full thickness."""
    stroke_filter: ThicknessTaperFilter = ThicknessTaperFilter(
        taper_samples=4, min_scale=0.2
    )
    points: RingBuffer[StrokePoint] = _stream(stroke_filter, 6)
    sizes: list[float] = [point.size for point in points.iter_time_order()]
    assert sizes == pytest.approx([0.2, 0.4, 0.6, 0.8, 1.0, 1.0])


def test_taper_counts_from_first_index_of_stroke() -> None:
    """Ensure the taper restarts from the first index seen after reset."""
    stroke_filter: ThicknessTaperFilter = ThicknessTaperFilter(
        taper_samples=2, min_scale=0.0
    )
    _stream(stroke_filter, 3)
    stroke_filter.reset()
    points: RingBuffer[StrokePoint] = _stream(stroke_filter, 3, first_index=100)
    sizes: list[float] = [point.size for point in points.iter_time_order()]
    assert sizes == pytest.approx([0.0, 0.5, 1.0])


def test_repeat_process_does_not_taper_twice() -> None:
    """Ensure re-running on an unchanged window keeps sizes."""
    stroke_filter: ThicknessTaperFilter = ThicknessTaperFilter(
        taper_samples=4, min_scale=0.5
    )
    points: RingBuffer[StrokePoint] = RingBuffer(2)
    indices: RingBuffer[int] = RingBuffer(2)
    points.push(StrokePoint(position=np.zeros(3), size=2.0))
    indices.push(0)
    stroke_filter.process(points, indices)
    stroke_filter.process(points, indices)
    assert points.get_from_end(0).size == pytest.approx(1.0)


def test_shared_filter_keeps_taper_of_stroke_in_progress() -> None:
    """Ensure a stroke beginning elsewhere does not restart another taper."""
    stroke_filter: ThicknessTaperFilter = ThicknessTaperFilter(
        taper_samples=4, min_scale=0.2
    )
    first: StrokeProcessor = StrokeProcessor()
    second: StrokeProcessor = StrokeProcessor()
    first.register_filter(stroke_filter)
    second.register_filter(stroke_filter)

    # Move the second processor's stroke indices ahead of the first's
    second.begin_stroke()
    for _ in range(3):
        second.update_stroke(StrokePoint(position=np.zeros(3), size=1.0))
    second.end_stroke()

    first.begin_stroke()
    first.update_stroke(StrokePoint(position=np.zeros(3), size=1.0))
    first.update_stroke(StrokePoint(position=np.zeros(3), size=1.0))

    second.begin_stroke()
    second.update_stroke(StrokePoint(position=np.zeros(3), size=1.0))
    first.update_stroke(StrokePoint(position=np.zeros(3), size=1.0))

    assert first.window.point_from_end(0).size == pytest.approx(0.6)
    assert second.window.point_from_end(0).size == pytest.approx(0.2)
