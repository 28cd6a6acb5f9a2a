################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the synthetic stroke demo entry point."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from oasis_stroke.cli.stroke_demo_cli import circle_stroke
from oasis_stroke.cli.stroke_demo_cli import main
from oasis_stroke.cli.stroke_demo_cli import rms_error


def test_circle_stroke_shapes() -> None:
    """Ensure the synthetic stroke has one point per sample."""
    rng: np.random.Generator = np.random.default_rng(0)
    ideal, points = circle_stroke(16, 0.0, rng)
    assert ideal.shape == (16, 3)
    assert len(points) == 16
    np.testing.assert_allclose(points[3].position, ideal[3])
    assert points[1].t_ns > points[0].t_ns


def test_rms_error() -> None:
    """Ensure RMS error is the root mean squared point distance."""
    ideal: np.ndarray = np.zeros((2, 3))
    positions: np.ndarray = np.array([[3.0, 4.0, 0.0], [0.0, 0.0, 0.0]])
    assert rms_error(positions, ideal) == pytest.approx(np.sqrt(12.5))
    assert rms_error(np.zeros((0, 3)), np.zeros((0, 3))) == 0.0


def test_main_runs(caplog: pytest.LogCaptureFixture) -> None:
    """Ensure the demo processes a stroke and reports diagnostics."""
    with caplog.at_level("INFO"):
        assert main(["--samples", "24", "--seed", "1"]) == 0
    assert "Smoothed RMS error" in caplog.text


def test_main_with_config(tmp_path: Path) -> None:
    """Ensure the demo loads parameters from YAML."""
    path: Path = tmp_path / "stroke.yaml"
    path.write_text(
        "taper:\n  enabled: true\nmoving_average:\n  neighborhood: 2\n",
        encoding="utf-8",
    )
    assert main(["--samples", "10", "--config", str(path)]) == 0


def test_main_rejects_non_positive_samples() -> None:
    """Ensure an empty stroke request is rejected."""
    assert main(["--samples", "0"]) == 2


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("broken.yaml", "moving_average: [\n"),
        ("unknown.yaml", "smoothing:\n  neighborhood: 2\n"),
        ("conflict.yaml", "grid_snap:\n  enabled: true\n  neighborhood: 2\n"),
        ("stroke.json", "{}\n"),
    ],
)
def test_main_rejects_bad_config(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, name: str, text: str
) -> None:
    """Ensure invalid configuration files are logged and return 2."""
    path: Path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    with caplog.at_level("ERROR"):
        assert main(["--samples", "10", "--config", str(path)]) == 2
    assert "Invalid stroke configuration" in caplog.text
