################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Stroke processing orchestration.

The processor buffers incoming stroke points in a fixed-capacity window, runs
the registered filters over the whole window on every update and reconciles
the window into an append-only output. Output entries are revised while their
sample is inside the trailing ``capacity - 1`` window positions and are frozen
once the sample ages out.

Calls are synchronous. Filters and sinks run on the caller's thread and must
not call back into the processor; doing so raises StrokeProcessorError.
"""

from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from typing import Iterator

from oasis_stroke.config.stroke_config import StrokeConfig
from oasis_stroke.filters import StrokeFilter
from oasis_stroke.sinks import StrokeBufferSink
from oasis_stroke.sinks import StrokeOutputSink
from oasis_stroke.sinks import StrokeWindowView
from oasis_stroke.stroke_types import ProcessorDiagnostics
from oasis_stroke.stroke_types import StrokeOutput
from oasis_stroke.stroke_types import StrokePoint
from oasis_stroke.timing.ring_buffer import RingBuffer


_LOG: logging.Logger = logging.getLogger(__name__)


class StrokeProcessorError(Exception):
    """Raised for stroke processor contract violations."""


class StrokeTransitionError(Exception):
    """Raised for invalid state transitions when transitions are strict."""


class StrokeState(enum.Enum):
    """Processor state. Actualizing always implies buffering."""

    IDLE = "idle"
    BUFFERING = "buffering"
    ACTUALIZING = "actualizing"


class StrokeProcessor:
    """Coordinator for windowed stroke filtering and output reconciliation.

    Lifecycle:
        begin_stroke() -> [start_actualizing()] -> update_stroke()* ->
        [stop_actualizing()] -> end_stroke()

    Invalid transitions are reported rather than raised: the call returns
    False, the state is unchanged, a warning is logged and the diagnostics
    count the rejection. With strict transitions configured a
    StrokeTransitionError is raised instead.
    """

    def __init__(self, *, config: StrokeConfig | None = None) -> None:
        """Initialize an idle processor without filters or sinks."""
        if config is None:
            config = StrokeConfig.defaults()
        if not isinstance(config, StrokeConfig):
            raise StrokeProcessorError("config must be a StrokeConfig")
        self._config: StrokeConfig = config

        self._filters: list[StrokeFilter] = []
        self._buffer_sinks: list[StrokeBufferSink] = []
        self._output_sinks: list[StrokeOutputSink] = []

        # Window capacity: largest filter neighborhood plus one
        self._max_memory: int = 1
        self._points: RingBuffer[StrokePoint] = RingBuffer(self._max_memory)
        self._indices: RingBuffer[int] = RingBuffer(self._max_memory)
        self._window: StrokeWindowView = StrokeWindowView(self._points, self._indices)

        self._buffering: bool = False
        self._actualizing: bool = False
        self._next_stroke_index: int = 0

        self._output: StrokeOutput = StrokeOutput()
        # Number of updates reconciled since actualization began
        self._output_cursor: int = 0

        self._dispatching: bool = False
        self._last_error: str | None = None
        self._counters: dict[str, int] = {
            "updates": 0,
            "actualized_updates": 0,
            "appended": 0,
            "revised": 0,
            "invalid_transitions": 0,
            "capacity_rebuilds": 0,
            "strokes_completed": 0,
        }

    @classmethod
    def from_config(cls, config: StrokeConfig) -> StrokeProcessor:
        """Create a processor with the configured filters registered."""
        processor: StrokeProcessor = cls(config=config)
        for stroke_filter in config.build_filters():
            processor.register_filter(stroke_filter)
        return processor

    ############################################################################
    # Properties
    ############################################################################

    @property
    def state(self) -> StrokeState:
        """Return the current processor state."""
        if self._actualizing:
            return StrokeState.ACTUALIZING
        if self._buffering:
            return StrokeState.BUFFERING
        return StrokeState.IDLE

    @property
    def is_buffering(self) -> bool:
        """Return True while a stroke is in progress."""
        return self._buffering

    @property
    def is_actualizing(self) -> bool:
        """Return True while finalized output is being produced."""
        return self._actualizing

    @property
    def window_capacity(self) -> int:
        """Return the capacity of the processing window."""
        return self._max_memory

    @property
    def window(self) -> StrokeWindowView:
        """Return a read-only view of the processing window."""
        return self._window

    @property
    def output(self) -> StrokeOutput:
        """Return the output of the current or most recent actualization."""
        return self._output

    @property
    def next_stroke_index(self) -> int:
        """Return the stroke index the next sample will receive."""
        return self._next_stroke_index

    @property
    def filters(self) -> tuple[StrokeFilter, ...]:
        """Return the registered filters in processing order."""
        return tuple(self._filters)

    @property
    def last_error(self) -> str | None:
        """Return the most recent rejected transition message."""
        return self._last_error

    ############################################################################
    # Registration
    ############################################################################

    def register_filter(self, stroke_filter: StrokeFilter) -> None:
        """Append a filter to the processing chain.

        Registering a filter whose neighborhood grows the window rebuilds the
        window, dropping the samples currently buffered.
        """
        if not isinstance(stroke_filter, StrokeFilter):
            raise StrokeProcessorError("stroke_filter must implement StrokeFilter")
        with self._guard():
            neighborhood: int = stroke_filter.required_neighborhood()
            if not isinstance(neighborhood, int) or isinstance(neighborhood, bool):
                raise StrokeProcessorError("required_neighborhood() must be an int")
            if neighborhood < 0:
                raise StrokeProcessorError(
                    "required_neighborhood() must be non-negative"
                )

            self._filters.append(stroke_filter)
            if self._buffering and self._config.warn_on_late_registration():
                _LOG.warning(
                    "Registering %r while a stroke is buffering; buffered samples "
                    "may be dropped",
                    stroke_filter,
                )

            if neighborhood + 1 > self._max_memory:
                self._rebuild_window(neighborhood + 1)

    def register_buffer_sink(self, sink: StrokeBufferSink) -> None:
        """Append a sink for the live window preview."""
        if not isinstance(sink, StrokeBufferSink):
            raise StrokeProcessorError("sink must implement StrokeBufferSink")
        with self._guard():
            self._buffer_sinks.append(sink)
            if self._buffering and self._config.warn_on_late_registration():
                _LOG.warning(
                    "Stroke buffer already active; %r will miss the start of the "
                    "preview",
                    sink,
                )

    def register_output_sink(self, sink: StrokeOutputSink) -> None:
        """Append a sink for the finalized output."""
        if not isinstance(sink, StrokeOutputSink):
            raise StrokeProcessorError("sink must implement StrokeOutputSink")
        with self._guard():
            self._output_sinks.append(sink)
            if self._buffering and self._config.warn_on_late_registration():
                _LOG.warning(
                    "Stroke in progress; %r will not receive the whole stroke",
                    sink,
                )

    ############################################################################
    # State machine
    ############################################################################

    def begin_stroke(self) -> bool:
        """Start buffering a new stroke.

        Returns:
            True if the stroke began, False if a stroke is already buffering
        """
        with self._guard():
            return self._begin_stroke()

    def start_actualizing(self) -> bool:
        """Start producing finalized output, beginning a stroke if idle.

        A new StrokeOutput is allocated, so outputs handed out earlier keep
        their contents.

        Returns:
            True if actualization started, False if already actualizing
        """
        with self._guard():
            if not self._buffering:
                self._begin_stroke()

            if self._actualizing:
                return self._reject(
                    "Stroke already actualizing; call stop_actualizing() first"
                )

            self._actualizing = True
            self._output = StrokeOutput()
            self._output_cursor = 0

            for sink in self._output_sinks:
                sink.on_actualization_begin()
            return True

    def update_stroke(self, point: StrokePoint) -> bool:
        """Ingest one stroke point.

        The point is copied into the window, so filters never modify the
        caller's instance.

        Returns:
            True if the point was processed, False if no stroke is buffering
        """
        if not isinstance(point, StrokePoint):
            raise StrokeProcessorError("point must be a StrokePoint")
        with self._guard():
            if not self._buffering:
                return self._reject("No stroke in progress; call begin_stroke() first")

            stroke_index: int = self._next_stroke_index
            self._next_stroke_index += 1
            self._points.push(point.copy())
            self._indices.push(stroke_index)
            self._counters["updates"] += 1

            for stroke_filter in self._filters:
                stroke_filter.process(self._points, self._indices)

            if self._actualizing:
                self._reconcile_output()
                self._counters["actualized_updates"] += 1
                for output_sink in self._output_sinks:
                    output_sink.on_output_update(self._output, self._max_memory)

            for buffer_sink in self._buffer_sinks:
                buffer_sink.on_window_update(self._window)

            _LOG.debug(
                "Processed stroke index %d (window %d/%d, output %d)",
                stroke_index,
                len(self._points),
                self._max_memory,
                len(self._output),
            )
            return True

    def stop_actualizing(self) -> bool:
        """Stop producing finalized output and close the current output.

        Returns:
            True if actualization stopped, False if it was not active
        """
        with self._guard():
            return self._stop_actualizing()

    def end_stroke(self) -> bool:
        """Finish the current stroke, stopping actualization if needed.

        Returns:
            True if the stroke ended, False if no stroke was buffering
        """
        with self._guard():
            if not self._buffering:
                return self._reject("No stroke in progress; nothing to end")

            if self._actualizing:
                self._stop_actualizing()

            self._buffering = False
            self._counters["strokes_completed"] += 1

            for sink in self._buffer_sinks:
                sink.on_stroke_end()

            _LOG.info(
                "Stroke ended after %d samples (output %d)",
                self._next_stroke_index,
                len(self._output),
            )
            return True

    ############################################################################
    # Diagnostics
    ############################################################################

    def diagnostics(self) -> ProcessorDiagnostics:
        """Return a snapshot of the processor diagnostics."""
        return ProcessorDiagnostics(
            state=self.state.value,
            window_capacity=self._max_memory,
            window_length=len(self._points),
            next_stroke_index=self._next_stroke_index,
            output_length=len(self._output),
            frozen_length=self._output.frozen_length(self._max_memory),
            updates=self._counters["updates"],
            actualized_updates=self._counters["actualized_updates"],
            appended=self._counters["appended"],
            revised=self._counters["revised"],
            invalid_transitions=self._counters["invalid_transitions"],
            capacity_rebuilds=self._counters["capacity_rebuilds"],
            strokes_completed=self._counters["strokes_completed"],
            last_error=self._last_error,
        )

    ############################################################################
    # Internal helpers
    ############################################################################

    @contextmanager
    def _guard(self) -> Iterator[None]:
        """Reject calls made from inside a filter or sink."""
        if self._dispatching:
            raise StrokeProcessorError(
                "Re-entrant call into StrokeProcessor from a filter or sink"
            )
        self._dispatching = True
        try:
            yield
        finally:
            self._dispatching = False

    def _begin_stroke(self) -> bool:
        if self._buffering:
            return self._reject(
                "Stroke in progress; call end_stroke() before beginning a new stroke"
            )
        self._buffering = True

        self._points.clear()
        self._indices.clear()

        for stroke_filter in self._filters:
            stroke_filter.reset()
        for sink in self._buffer_sinks:
            sink.on_stroke_begin()
        return True

    def _stop_actualizing(self) -> bool:
        if not self._actualizing:
            _LOG.debug("stop_actualizing() called while not actualizing")
            return False
        self._actualizing = False
        self._output.close()

        for sink in self._output_sinks:
            sink.on_actualization_end()
        return True

    def _reject(self, message: str) -> bool:
        """Report an invalid transition and leave the state unchanged."""
        self._counters["invalid_transitions"] += 1
        self._last_error = message
        if self._config.strict_transitions():
            raise StrokeTransitionError(message)
        _LOG.warning("%s (state: %s)", message, self.state.value)
        return False

    def _rebuild_window(self, capacity: int) -> None:
        """Replace the window with one of a larger capacity."""
        dropped: int = len(self._points)
        self._max_memory = capacity
        self._points = RingBuffer(capacity)
        self._indices = RingBuffer(capacity)
        self._window = StrokeWindowView(self._points, self._indices)
        self._counters["capacity_rebuilds"] += 1
        _LOG.info(
            "Window capacity rebuilt to %d, dropped %d buffered samples",
            capacity,
            dropped,
        )

    def _reconcile_output(self) -> None:
        """Merge the window into the output.

        With ``cursor`` updates already reconciled and ``W`` samples in the
        window, the newest ``min(cursor, W - 1) + 1`` samples map onto the
        tail of the output. The newest sample is appended and the others
        overwrite their existing entries.
        """
        window_length: int = len(self._points)
        cursor: int = self._output_cursor
        reach: int = min(cursor, window_length - 1)
        first_output_index: int = max(0, cursor - (window_length - 1))
        first_offset: int = min(window_length - 1, cursor)

        for step in range(reach + 1):
            output_index: int = first_output_index + step
            point: StrokePoint = self._points.get_from_end(first_offset - step).copy()
            if output_index == len(self._output):
                self._output.append_point(point)
                self._counters["appended"] += 1
            elif output_index < len(self._output):
                self._output.revise_point(output_index, point)
                self._counters["revised"] += 1
            else:
                raise StrokeProcessorError(
                    f"Output index {output_index} skips past output length "
                    f"{len(self._output)}"
                )

        self._output_cursor += 1
