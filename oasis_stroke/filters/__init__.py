################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Windowed stroke filters."""

from __future__ import annotations

from oasis_stroke.filters.grid_snap import GridSnapFilter
from oasis_stroke.filters.moving_average import MovingAverageFilter
from oasis_stroke.filters.stroke_filter import StrokeFilter
from oasis_stroke.filters.stroke_filter import StrokeFilterError
from oasis_stroke.filters.thickness_taper import ThicknessTaperFilter


__all__ = [
    "GridSnapFilter",
    "MovingAverageFilter",
    "StrokeFilter",
    "StrokeFilterError",
    "ThicknessTaperFilter",
]
