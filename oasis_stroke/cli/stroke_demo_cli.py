################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Entry point that smooths a synthetic noisy stroke and reports diagnostics.
"""

import argparse
import logging
from typing import Optional

import numpy as np

from oasis_stroke.config.params_yaml import StrokeParamsYamlError
from oasis_stroke.config.params_yaml import load_params_file
from oasis_stroke.config.stroke_config import StrokeConfig
from oasis_stroke.config.stroke_config import StrokeConfigError
from oasis_stroke.config.stroke_params import StrokeParams
from oasis_stroke.pipeline.stroke_processor import StrokeProcessor
from oasis_stroke.sinks import OutputPolylineSink
from oasis_stroke.sinks import PreviewPolylineSink
from oasis_stroke.stroke_types import StrokePoint


_LOG: logging.Logger = logging.getLogger(__name__)


# Radius of the synthetic circular stroke in meters
CIRCLE_RADIUS_M: float = 0.1

# Sample period of the synthetic stroke in nanoseconds (90 Hz)
SAMPLE_PERIOD_NS: int = 11_111_111


################################################################################
# Synthetic stroke
################################################################################


def circle_stroke(
    samples: int, noise_m: float, rng: np.random.Generator
) -> tuple[np.ndarray, list[StrokePoint]]:
    """Return ideal circle positions and noisy stroke points along them."""
    angles: np.ndarray = np.linspace(0.0, 2.0 * np.pi, samples, endpoint=False)
    ideal: np.ndarray = np.stack(
        [
            CIRCLE_RADIUS_M * np.cos(angles),
            CIRCLE_RADIUS_M * np.sin(angles),
            np.zeros_like(angles),
        ],
        axis=1,
    )
    noisy: np.ndarray = ideal + rng.normal(0.0, noise_m, size=ideal.shape)
    points: list[StrokePoint] = [
        StrokePoint(position=noisy[index], t_ns=index * SAMPLE_PERIOD_NS)
        for index in range(samples)
    ]
    return ideal, points


def rms_error(positions: np.ndarray, ideal: np.ndarray) -> float:
    """Return the RMS distance between two polylines of equal length."""
    if positions.shape[0] == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.sum((positions - ideal) ** 2, axis=1))))


################################################################################
# Entry point
################################################################################


def _parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Smooth a synthetic noisy stroke and report diagnostics"
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=120,
        help="Number of samples in the stroke",
    )
    parser.add_argument(
        "--noise",
        type=float,
        default=0.002,
        help="Standard deviation of the position noise in meters",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the noise generator",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with stroke parameters",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every processed sample",
    )
    return parser.parse_args(args=args)


def main(args: Optional[list[str]] = None) -> int:
    options: argparse.Namespace = _parse_args(args=args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if options.samples < 1:
        _LOG.error("--samples must be positive")
        return 2

    params: StrokeParams = StrokeParams.defaults()
    try:
        if options.config is not None:
            params = load_params_file(options.config)
        config: StrokeConfig = StrokeConfig(params)
    except (StrokeParamsYamlError, StrokeConfigError) as exc:
        _LOG.error("Invalid stroke configuration: %s", exc)
        return 2

    processor: StrokeProcessor = StrokeProcessor.from_config(config)
    preview: PreviewPolylineSink = PreviewPolylineSink()
    polyline: OutputPolylineSink = OutputPolylineSink()
    processor.register_buffer_sink(preview)
    processor.register_output_sink(polyline)

    rng: np.random.Generator = np.random.default_rng(options.seed)
    ideal, points = circle_stroke(options.samples, options.noise, rng)

    processor.start_actualizing()
    for point in points:
        processor.update_stroke(point)
    processor.end_stroke()

    raw: np.ndarray = np.stack([point.position for point in points], axis=0)
    _LOG.info("Filters: %s", ", ".join(repr(f) for f in processor.filters))
    _LOG.info("Diagnostics: %s", processor.diagnostics().to_dict())
    _LOG.info("Raw RMS error: %.6f m", rms_error(raw, ideal))
    _LOG.info("Smoothed RMS error: %.6f m", rms_error(polyline.positions, ideal))
    _LOG.info(
        "Output revisions observed by the polyline sink: %d",
        polyline.revised_entries,
    )
    return 0
