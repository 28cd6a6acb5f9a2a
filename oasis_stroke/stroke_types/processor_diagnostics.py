################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Diagnostics snapshot for the stroke processor."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessorDiagnostics:
    """Structured diagnostics bundle for the stroke processor.

    Attributes:
        state: Name of the processor state
        window_capacity: Capacity of the processing window
        window_length: Number of samples currently in the window
        next_stroke_index: Stroke index assigned to the next sample
        output_length: Length of the current finalized output
        frozen_length: Length of the output prefix that can no longer change
        updates: Number of accepted stroke updates
        actualized_updates: Number of updates made while actualizing
        appended: Number of output entries appended
        revised: Number of output entries overwritten
        invalid_transitions: Number of rejected state transitions
        capacity_rebuilds: Number of window rebuilds caused by registration
        strokes_completed: Number of strokes ended
        last_error: Most recent rejected transition message
    """

    state: str
    window_capacity: int
    window_length: int
    next_stroke_index: int
    output_length: int
    frozen_length: int
    updates: int = 0
    actualized_updates: int = 0
    appended: int = 0
    revised: int = 0
    invalid_transitions: int = 0
    capacity_rebuilds: int = 0
    strokes_completed: int = 0
    last_error: str | None = None

    def __post_init__(self) -> None:
        """Validate diagnostic fields."""
        if not isinstance(self.state, str):
            raise ValueError("state must be a str")
        for name in (
            "window_capacity",
            "window_length",
            "next_stroke_index",
            "output_length",
            "frozen_length",
            "updates",
            "actualized_updates",
            "appended",
            "revised",
            "invalid_transitions",
            "capacity_rebuilds",
            "strokes_completed",
        ):
            _require_non_negative_int(getattr(self, name), name)
        if self.window_length > self.window_capacity:
            raise ValueError("window_length must not exceed window_capacity")
        if self.frozen_length > self.output_length:
            raise ValueError("frozen_length must not exceed output_length")
        if self.last_error is not None and not isinstance(self.last_error, str):
            raise ValueError("last_error must be a str or None")

    def has_errors(self) -> bool:
        """Return True when any transition was rejected."""
        return self.invalid_transitions > 0

    def to_dict(self) -> dict[str, object]:
        """Return a dictionary representation of the diagnostics."""
        return {
            "state": self.state,
            "window_capacity": self.window_capacity,
            "window_length": self.window_length,
            "next_stroke_index": self.next_stroke_index,
            "output_length": self.output_length,
            "frozen_length": self.frozen_length,
            "updates": self.updates,
            "actualized_updates": self.actualized_updates,
            "appended": self.appended,
            "revised": self.revised,
            "invalid_transitions": self.invalid_transitions,
            "capacity_rebuilds": self.capacity_rebuilds,
            "strokes_completed": self.strokes_completed,
            "last_error": self.last_error,
        }


def _require_non_negative_int(value: object, name: str) -> None:
    """Ensure a value is a non-negative int."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
