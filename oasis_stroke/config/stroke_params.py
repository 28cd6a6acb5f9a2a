################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for stroke processing."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any
from typing import Mapping

import numpy as np


# Raise on invalid state transitions instead of reporting them
PROCESSOR_STRICT_TRANSITIONS: bool = False
# Log a warning when filters or sinks are registered mid-stroke
PROCESSOR_WARN_ON_LATE_REGISTRATION: bool = True

# Enable the symmetric moving average filter
MOVING_AVERAGE_ENABLED: bool = True
# Number of neighbors averaged on each side of a sample
MOVING_AVERAGE_NEIGHBORHOOD: int = 4

# Enable grid snapping of positions
GRID_SNAP_ENABLED: bool = False
# Grid spacing in meters
GRID_SNAP_STEP_M: float = 0.001
# Number of samples behind the newest one that are snapped again
GRID_SNAP_NEIGHBORHOOD: int = 0

# Enable thickness tapering at the start of a stroke
TAPER_ENABLED: bool = False
# Number of samples over which a stroke grows to full thickness
TAPER_SAMPLES: int = 8
# Thickness scale of the first sample
TAPER_MIN_SCALE: float = 0.2


class StrokeParamsError(Exception):
    """Raised when stroke parameter validation fails."""


def _require_bool(value: Any, name: str) -> None:
    """Require a bool value."""
    if not isinstance(value, bool):
        raise StrokeParamsError(f"{name} must be a bool")


def _require_int(value: Any, name: str) -> None:
    """Require an int value that is not a bool."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise StrokeParamsError(f"{name} must be an int")


def _require_non_negative_int(value: Any, name: str) -> None:
    """Require a non-negative int value."""
    _require_int(value, name)
    if value < 0:
        raise StrokeParamsError(f"{name} must be non-negative")


def _require_positive_int(value: Any, name: str) -> None:
    """Require a positive int value."""
    _require_int(value, name)
    if value <= 0:
        raise StrokeParamsError(f"{name} must be positive")


def _require_positive(value: Any, name: str) -> None:
    """Require a finite positive value."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StrokeParamsError(f"{name} must be a number")
    if not np.isfinite(value) or value <= 0.0:
        raise StrokeParamsError(f"{name} must be positive")


def _require_unit_interval(value: Any, name: str) -> None:
    """Require a finite value within [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StrokeParamsError(f"{name} must be a number")
    if not np.isfinite(value) or value < 0.0 or value > 1.0:
        raise StrokeParamsError(f"{name} must be within [0, 1]")


@dataclass(frozen=True)
class ProcessorParams:
    """Stroke processor behavior."""

    # Raise on invalid state transitions instead of reporting them
    strict_transitions: bool = PROCESSOR_STRICT_TRANSITIONS
    # Log a warning when filters or sinks are registered mid-stroke
    warn_on_late_registration: bool = PROCESSOR_WARN_ON_LATE_REGISTRATION


@dataclass(frozen=True)
class MovingAverageParams:
    """Symmetric moving average filter parameters."""

    # Enable the filter
    enabled: bool = MOVING_AVERAGE_ENABLED
    # Number of neighbors averaged on each side of a sample
    neighborhood: int = MOVING_AVERAGE_NEIGHBORHOOD


@dataclass(frozen=True)
class GridSnapParams:
    """Grid snapping filter parameters."""

    # Enable the filter
    enabled: bool = GRID_SNAP_ENABLED
    # Grid spacing in meters
    step_m: float = GRID_SNAP_STEP_M
    # Number of samples behind the newest one that are snapped again
    neighborhood: int = GRID_SNAP_NEIGHBORHOOD


@dataclass(frozen=True)
class TaperParams:
    """Thickness taper filter parameters."""

    # Enable the filter
    enabled: bool = TAPER_ENABLED
    # Number of samples over which a stroke grows to full thickness
    taper_samples: int = TAPER_SAMPLES
    # Thickness scale of the first sample
    min_scale: float = TAPER_MIN_SCALE


@dataclass(frozen=True)
class StrokeParams:
    """Complete configuration tree for stroke processing."""

    processor: ProcessorParams
    moving_average: MovingAverageParams
    grid_snap: GridSnapParams
    taper: TaperParams

    @classmethod
    def defaults(cls) -> StrokeParams:
        """Return the default stroke parameter tree."""
        return cls(
            processor=ProcessorParams(),
            moving_average=MovingAverageParams(),
            grid_snap=GridSnapParams(),
            taper=TaperParams(),
        )

    @classmethod
    def from_nested_dict(cls, data: Mapping[str, Any]) -> StrokeParams:
        """Build parameters from a nested mapping, filling in defaults.

        Unknown namespaces or keys are rejected so typos do not silently fall
        back to defaults.
        """
        if not isinstance(data, Mapping):
            raise StrokeParamsError("Parameter root must be a mapping")

        defaults: StrokeParams = cls.defaults()
        namespaces: dict[str, Any] = {
            field.name: getattr(defaults, field.name) for field in fields(cls)
        }
        unknown: set[str] = {key for key in data if key not in namespaces}
        if unknown:
            raise StrokeParamsError(
                f"Unexpected namespaces: {', '.join(sorted(unknown))}"
            )

        overrides: dict[str, Any] = {}
        for name, section in data.items():
            if section is None:
                continue
            if not isinstance(section, Mapping):
                raise StrokeParamsError(f"{name} must be a mapping")
            base: Any = namespaces[name]
            allowed: set[str] = {field.name for field in fields(base)}
            unknown_keys: set[str] = {key for key in section if key not in allowed}
            if unknown_keys:
                raise StrokeParamsError(
                    f"Unexpected keys in {name}: {', '.join(sorted(unknown_keys))}"
                )
            overrides[name] = replace(base, **dict(section))

        return replace(defaults, **overrides)

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _require_bool(self.processor.strict_transitions, "processor.strict_transitions")
        _require_bool(
            self.processor.warn_on_late_registration,
            "processor.warn_on_late_registration",
        )

        _require_bool(self.moving_average.enabled, "moving_average.enabled")
        _require_non_negative_int(
            self.moving_average.neighborhood, "moving_average.neighborhood"
        )

        _require_bool(self.grid_snap.enabled, "grid_snap.enabled")
        _require_positive(self.grid_snap.step_m, "grid_snap.step_m")
        _require_non_negative_int(self.grid_snap.neighborhood, "grid_snap.neighborhood")

        _require_bool(self.taper.enabled, "taper.enabled")
        _require_positive_int(self.taper.taper_samples, "taper.taper_samples")
        _require_unit_interval(self.taper.min_scale, "taper.min_scale")

    def replace(self, **namespace_overrides: Any) -> StrokeParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
