################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper for stroke processing."""

from __future__ import annotations

from dataclasses import dataclass

from oasis_stroke.config.stroke_params import StrokeParams
from oasis_stroke.config.stroke_params import StrokeParamsError
from oasis_stroke.filters import GridSnapFilter
from oasis_stroke.filters import MovingAverageFilter
from oasis_stroke.filters import StrokeFilter
from oasis_stroke.filters import ThicknessTaperFilter


class StrokeConfigError(Exception):
    """Raised when stroke configuration validation fails."""


@dataclass(frozen=True)
class StrokeConfig:
    """Convenience wrapper around stroke parameters."""

    params: StrokeParams

    def __init__(self, params: StrokeParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> StrokeConfig:
        """Return a configuration built from default parameters."""
        return cls(StrokeParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants and cross-namespace policies."""
        if not isinstance(self.params, StrokeParams):
            raise StrokeConfigError("params must be a StrokeParams")
        try:
            self.params.validate()
        except StrokeParamsError as exc:
            raise StrokeConfigError(str(exc)) from exc

        # Snapping behind the newest sample rewrites moving average output
        if (
            self.params.grid_snap.enabled
            and self.params.moving_average.enabled
            and self.params.grid_snap.neighborhood != 0
        ):
            raise StrokeConfigError(
                "grid_snap.neighborhood must be 0 when moving_average is enabled"
            )

    def strict_transitions(self) -> bool:
        """Return True when invalid transitions raise."""
        return self.params.processor.strict_transitions

    def warn_on_late_registration(self) -> bool:
        """Return True when mid-stroke registration is logged."""
        return self.params.processor.warn_on_late_registration

    def build_filters(self) -> list[StrokeFilter]:
        """Return the enabled filters in processing order.

        Thickness is tapered first, positions are snapped next and the moving
        average runs last so it smooths the snapped positions.
        """
        filters: list[StrokeFilter] = []
        if self.params.taper.enabled:
            filters.append(
                ThicknessTaperFilter(
                    taper_samples=self.params.taper.taper_samples,
                    min_scale=self.params.taper.min_scale,
                )
            )
        if self.params.grid_snap.enabled:
            filters.append(
                GridSnapFilter(
                    step_m=self.params.grid_snap.step_m,
                    neighborhood=self.params.grid_snap.neighborhood,
                )
            )
        if self.params.moving_average.enabled:
            filters.append(
                MovingAverageFilter(
                    neighborhood=self.params.moving_average.neighborhood
                )
            )
        return filters
