################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Stroke point sample type."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any

import numpy as np


# Identity rotation as a wxyz quaternion
IDENTITY_WXYZ: np.ndarray = np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)

# Default stroke color as RGBA in [0, 1]
DEFAULT_COLOR_RGBA: np.ndarray = np.array([1.0, 1.0, 1.0, 1.0], dtype=np.float64)

# Default stroke thickness in meters
DEFAULT_SIZE_M: float = 0.005

# Quaternion normalization tolerance
QUAT_NORM_EPS: float = 1e-12


class StrokePointError(Exception):
    """Raised when a stroke point has invalid fields."""


def _as_float_array(value: Any, name: str, shape: tuple[int, ...]) -> np.ndarray:
    """Coerce a value to a finite float64 array with a required shape."""
    array: np.ndarray = np.array(value, dtype=np.float64)
    if array.shape != shape:
        raise StrokePointError(f"{name} must have shape {shape}")
    if not np.all(np.isfinite(array)):
        raise StrokePointError(f"{name} must contain finite values")
    return array


@dataclass(eq=False)
class StrokePoint:
    """One tracked sample of a stroke.

    Filters may overwrite any field in place while the point is inside the
    processing window.

    Attributes:
        position: Position in meters, shape (3,)
        rotation_wxyz: Orientation of the brush as a unit quaternion, shape (4,)
        color_rgba: Color as RGBA in [0, 1], shape (4,)
        size: Stroke thickness in meters
        t_ns: Capture timestamp in nanoseconds
    """

    position: np.ndarray
    rotation_wxyz: np.ndarray = field(default_factory=lambda: IDENTITY_WXYZ.copy())
    color_rgba: np.ndarray = field(default_factory=lambda: DEFAULT_COLOR_RGBA.copy())
    size: float = DEFAULT_SIZE_M
    t_ns: int = 0

    def __post_init__(self) -> None:
        """Coerce array fields and validate scalars."""
        self.position = _as_float_array(self.position, "position", (3,))
        self.rotation_wxyz = _as_float_array(
            self.rotation_wxyz, "rotation_wxyz", (4,)
        )
        norm: float = float(np.linalg.norm(self.rotation_wxyz))
        if norm <= QUAT_NORM_EPS:
            raise StrokePointError("rotation_wxyz must be non-zero")
        if abs(norm - 1.0) > QUAT_NORM_EPS:
            self.rotation_wxyz = self.rotation_wxyz / norm
        self.color_rgba = _as_float_array(self.color_rgba, "color_rgba", (4,))
        if np.any(self.color_rgba < 0.0) or np.any(self.color_rgba > 1.0):
            raise StrokePointError("color_rgba must be within [0, 1]")

        self.size = float(self.size)
        if not np.isfinite(self.size) or self.size < 0.0:
            raise StrokePointError("size must be finite and non-negative")
        if not isinstance(self.t_ns, int) or isinstance(self.t_ns, bool):
            raise StrokePointError("t_ns must be an int")
        if self.t_ns < 0:
            raise StrokePointError("t_ns must be non-negative")

    def copy(self) -> StrokePoint:
        """Return a deep copy of the point."""
        return StrokePoint(
            position=self.position.copy(),
            rotation_wxyz=self.rotation_wxyz.copy(),
            color_rgba=self.color_rgba.copy(),
            size=self.size,
            t_ns=self.t_ns,
        )

    def same_as(self, other: StrokePoint) -> bool:
        """Return True when every field matches exactly."""
        return (
            np.array_equal(self.position, other.position)
            and np.array_equal(self.rotation_wxyz, other.rotation_wxyz)
            and np.array_equal(self.color_rgba, other.color_rgba)
            and self.size == other.size
            and self.t_ns == other.t_ns
        )

    def to_dict(self) -> dict[str, object]:
        """Return a dictionary representation of the point."""
        return {
            "position": self.position.tolist(),
            "rotation_wxyz": self.rotation_wxyz.tolist(),
            "color_rgba": self.color_rgba.tolist(),
            "size": self.size,
            "t_ns": self.t_ns,
        }
