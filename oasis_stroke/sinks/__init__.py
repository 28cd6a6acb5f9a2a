################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Renderer sinks for stroke previews and finalized output."""

from __future__ import annotations

from oasis_stroke.sinks.polyline_sinks import OutputPolylineSink
from oasis_stroke.sinks.polyline_sinks import PreviewPolylineSink
from oasis_stroke.sinks.stroke_sinks import StrokeBufferSink
from oasis_stroke.sinks.stroke_sinks import StrokeOutputSink
from oasis_stroke.sinks.stroke_sinks import StrokeWindowView


__all__ = [
    "OutputPolylineSink",
    "PreviewPolylineSink",
    "StrokeBufferSink",
    "StrokeOutputSink",
    "StrokeWindowView",
]
