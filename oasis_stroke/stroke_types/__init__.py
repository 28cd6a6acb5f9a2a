################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Type definitions for stroke processing."""

from __future__ import annotations

from oasis_stroke.stroke_types.processor_diagnostics import ProcessorDiagnostics
from oasis_stroke.stroke_types.stroke_output import StrokeOutput
from oasis_stroke.stroke_types.stroke_output import StrokeOutputError
from oasis_stroke.stroke_types.stroke_point import StrokePoint
from oasis_stroke.stroke_types.stroke_point import StrokePointError


__all__ = [
    "ProcessorDiagnostics",
    "StrokeOutput",
    "StrokeOutputError",
    "StrokePoint",
    "StrokePointError",
]
