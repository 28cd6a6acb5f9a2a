################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the polyline renderer sinks."""

from __future__ import annotations

import numpy as np

from oasis_stroke.filters import MovingAverageFilter
from oasis_stroke.pipeline.stroke_processor import StrokeProcessor
from oasis_stroke.sinks import OutputPolylineSink
from oasis_stroke.sinks import PreviewPolylineSink
from oasis_stroke.sinks import StrokeBufferSink
from oasis_stroke.sinks import StrokeOutputSink
from oasis_stroke.sinks import StrokeWindowView
from oasis_stroke.stroke_types import StrokeOutput
from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


def _point(x: float) -> StrokePoint:
    return StrokePoint(position=np.array([x, 0.0, 0.0], dtype=np.float64))


def test_sinks_implement_protocols() -> None:
    """Ensure the polyline sinks satisfy the sink interfaces."""
    assert isinstance(PreviewPolylineSink(), StrokeBufferSink)
    assert isinstance(OutputPolylineSink(), StrokeOutputSink)
    assert not isinstance(PreviewPolylineSink(), StrokeOutputSink)


def test_window_view_reads_through() -> None:
    """Ensure the view reflects the live window but hands out copies."""
    points: RingBuffer[StrokePoint] = RingBuffer(3)
    indices: RingBuffer[int] = RingBuffer(3)
    view: StrokeWindowView = StrokeWindowView(points, indices)
    assert len(view) == 0
    assert view.capacity == 3
    assert view.positions().shape == (0, 3)

    for stroke_index in range(4):
        points.push(_point(float(stroke_index)))
        indices.push(stroke_index)

    assert len(view) == 3
    assert view.indices() == [1, 2, 3]
    assert view.index_from_end(0) == 3
    np.testing.assert_array_equal(view.positions()[:, 0], [1.0, 2.0, 3.0])

    copied: StrokePoint = view.point_from_end(0)
    copied.position[0] = 100.0
    assert points.get_from_end(0).position[0] == 3.0
    assert [point.position[0] for point in view.points()] == [1.0, 2.0, 3.0]


def test_preview_sink_tracks_window() -> None:
    """Ensure the preview sink holds the latest window contents."""
    preview: PreviewPolylineSink = PreviewPolylineSink()
    processor: StrokeProcessor = StrokeProcessor()
    processor.register_filter(MovingAverageFilter(2))
    processor.register_buffer_sink(preview)

    processor.begin_stroke()
    for x in range(5):
        processor.update_stroke(_point(float(x)))
    assert preview.active
    assert preview.update_count == 5
    assert preview.indices == [2, 3, 4]
    assert preview.positions.shape == (3, 3)

    processor.end_stroke()
    assert not preview.active
    assert preview.stroke_count == 1

    processor.begin_stroke()
    assert preview.update_count == 0
    assert preview.positions.shape == (0, 3)


def test_output_sink_mirrors_output() -> None:
    """Ensure the output polyline matches the finalized output."""
    rng: np.random.Generator = np.random.default_rng(5)
    polyline: OutputPolylineSink = OutputPolylineSink()
    processor: StrokeProcessor = StrokeProcessor()
    processor.register_filter(MovingAverageFilter(4))
    processor.register_output_sink(polyline)

    processor.start_actualizing()
    for _ in range(12):
        processor.update_stroke(StrokePoint(position=rng.normal(size=3)))
        np.testing.assert_array_equal(
            polyline.positions, processor.output.positions()
        )
        assert polyline.frozen_length == processor.output.frozen_length(5)

    assert polyline.active
    assert polyline.window_capacity == 5
    assert polyline.revised_entries > 0
    processor.end_stroke()

    assert polyline.finalized
    assert not polyline.active
    assert polyline.frozen_length == 12
    assert polyline.output is processor.output


def test_output_sink_copy_is_independent() -> None:
    """Ensure the positions property returns a copy."""
    polyline: OutputPolylineSink = OutputPolylineSink()
    output: StrokeOutput = StrokeOutput()
    output.append_point(_point(1.0))

    polyline.on_actualization_begin()
    polyline.on_output_update(output, 1)
    positions: np.ndarray = polyline.positions
    positions[0, 0] = 50.0
    assert polyline.positions[0, 0] == 1.0
    assert polyline.frozen_length == 1


def test_output_sink_buffer_grows_by_doubling() -> None:
    """Ensure the polyline buffer is not reallocated on every update."""
    polyline: OutputPolylineSink = OutputPolylineSink(initial_capacity=4)
    processor: StrokeProcessor = StrokeProcessor()
    processor.register_filter(MovingAverageFilter(2))
    processor.register_output_sink(polyline)

    processor.start_actualizing()
    for x in range(20):
        processor.update_stroke(_point(float(x)))

    # 4 -> 8 -> 16 -> 32
    assert polyline.reallocations == 3
    assert polyline.buffer_capacity == 32
    assert polyline.positions.shape == (20, 3)


def test_output_sink_does_not_reread_frozen_rows() -> None:
    """Ensure only rows past the frozen prefix are copied from the output."""
    polyline: OutputPolylineSink = OutputPolylineSink()
    output: StrokeOutput = StrokeOutput()
    polyline.on_actualization_begin()
    for x in range(5):
        output.append_point(_point(float(x)))
        polyline.on_output_update(output, 2)
    assert polyline.frozen_length == 4

    # Rewriting a frozen entry behind the sink's back is not picked up
    output.revise_point(0, _point(100.0))
    output.revise_point(4, _point(40.0))
    polyline.on_output_update(output, 2)

    np.testing.assert_array_equal(
        polyline.positions[:, 0], [0.0, 1.0, 2.0, 3.0, 40.0]
    )
    assert polyline.revised_entries == 1
