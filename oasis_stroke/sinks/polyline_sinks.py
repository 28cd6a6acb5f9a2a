################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Sinks that mirror strokes into numpy polylines."""

from __future__ import annotations

import logging

import numpy as np

from oasis_stroke.sinks.stroke_sinks import StrokeWindowView
from oasis_stroke.stroke_types import StrokeOutput


_LOG: logging.Logger = logging.getLogger(__name__)

# Initial number of rows reserved for the mirrored polyline
INITIAL_CAPACITY: int = 64


class PreviewPolylineSink:
    """Keep the latest window preview as an (N, 3) polyline."""

    def __init__(self) -> None:
        self.active: bool = False
        self.positions: np.ndarray = np.zeros((0, 3), dtype=np.float64)
        self.indices: list[int] = []
        self.update_count: int = 0
        self.stroke_count: int = 0

    def on_stroke_begin(self) -> None:
        self.active = True
        self.positions = np.zeros((0, 3), dtype=np.float64)
        self.indices = []
        self.update_count = 0

    def on_window_update(self, window: StrokeWindowView) -> None:
        self.positions = window.positions()
        self.indices = window.indices()
        self.update_count += 1

    def on_stroke_end(self) -> None:
        self.active = False
        self.stroke_count += 1


class OutputPolylineSink:
    """Mirror the finalized output into an (N, 3) polyline.

    Vertices live in a buffer whose capacity doubles when full. Each update
    writes only the rows from the previous frozen length onward, so frozen
    vertices are copied once and never read from the output again.
    """

    def __init__(self, initial_capacity: int = INITIAL_CAPACITY) -> None:
        if not isinstance(initial_capacity, int) or initial_capacity < 1:
            raise ValueError("initial_capacity must be a positive int")
        self.active: bool = False
        self.finalized: bool = False
        self.output: StrokeOutput | None = None
        self.window_capacity: int = 0
        self.revised_entries: int = 0
        self.reallocations: int = 0
        self._buffer: np.ndarray = np.zeros((initial_capacity, 3), dtype=np.float64)
        self._length: int = 0
        self._frozen_length: int = 0

    @property
    def positions(self) -> np.ndarray:
        """Return a copy of the mirrored polyline."""
        return self._buffer[: self._length].copy()

    @property
    def buffer_capacity(self) -> int:
        """Return the number of rows reserved for vertices."""
        return self._buffer.shape[0]

    @property
    def frozen_length(self) -> int:
        """Return the number of leading vertices that can no longer change."""
        return self._frozen_length

    def on_actualization_begin(self) -> None:
        self.active = True
        self.finalized = False
        self.output = None
        self.revised_entries = 0
        self._length = 0
        self._frozen_length = 0

    def on_output_update(self, output: StrokeOutput, window_capacity: int) -> None:
        self.output = output
        self.window_capacity = window_capacity

        length: int = len(output)
        self._reserve(length)
        for index in range(min(self._frozen_length, length), length):
            position: np.ndarray = output[index].position
            if index < self._length and not np.array_equal(
                self._buffer[index], position
            ):
                self.revised_entries += 1
            self._buffer[index] = position

        self._length = length
        self._frozen_length = output.frozen_length(window_capacity)

    def on_actualization_end(self) -> None:
        self.active = False
        self.finalized = True
        self._frozen_length = self._length
        _LOG.debug(
            "Finalized polyline with %d vertices, %d revisions",
            self._length,
            self.revised_entries,
        )

    def _reserve(self, rows: int) -> None:
        """Grow the buffer by doubling until it holds the given rows."""
        capacity: int = self._buffer.shape[0]
        if rows <= capacity:
            return
        while capacity < rows:
            capacity *= 2
        grown: np.ndarray = np.zeros((capacity, 3), dtype=np.float64)
        grown[: self._length] = self._buffer[: self._length]
        self._buffer = grown
        self.reallocations += 1
