################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML loading and dumping of stroke parameters."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from typing import cast

import yaml

from oasis_stroke.config.stroke_params import StrokeParams
from oasis_stroke.config.stroke_params import StrokeParamsError


class StrokeParamsYamlError(Exception):
    """Raised when stroke parameter YAML cannot be parsed."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True when the path has a YAML suffix."""
    suffix: str = Path(path).suffix.lower()
    return suffix in {".yaml", ".yml"}


def dumps_params_yaml(params: StrokeParams) -> str:
    """Serialize parameters to deterministic YAML."""
    data: dict[str, Any] = params.as_nested_dict()
    safe_dump: Any = cast(Any, yaml.safe_dump)
    return safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def loads_params_yaml(text: str) -> StrokeParams:
    """Parse and validate parameters from YAML text.

    An empty document yields the defaults.
    """
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise StrokeParamsYamlError(f"Invalid YAML: {exc}") from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise StrokeParamsYamlError("YAML root must be a mapping")

    try:
        params: StrokeParams = StrokeParams.from_nested_dict(loaded)
        params.validate()
    except (StrokeParamsError, TypeError) as exc:
        raise StrokeParamsYamlError(str(exc)) from exc
    return params


def load_params_file(path: str | os.PathLike[str]) -> StrokeParams:
    """Load and validate parameters from a YAML file."""
    if not is_yaml_path(path):
        raise StrokeParamsYamlError("Path must end with .yaml or .yml")
    try:
        text: str = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise StrokeParamsYamlError(f"Failed to read {path}: {exc}") from exc
    return loads_params_yaml(text)
