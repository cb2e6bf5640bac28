"""Tool configuration: defaults plus an optional nostd-matrix.yaml in the working directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from nostd_matrix.errors import UsageError

CONFIG_FILE_NAME = "nostd-matrix.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "cargo": "cargo",
    "target_env": "TARGET",
    "locked": False,
    "encoding": "json",
}


def resolve_config(overrides: dict[str, Any] | None) -> dict[str, Any]:
    """Return config dict with defaults filled. Unknown keys are ignored.

    Boolean keys must be YAML booleans; string keys must be set (not null).
    """
    out = dict(DEFAULT_CONFIG)
    if overrides is None:
        return out
    for k, v in overrides.items():
        if k not in out:
            continue
        if isinstance(DEFAULT_CONFIG[k], bool):
            if not isinstance(v, bool):
                msg = f"config '{k}' must be true or false, got {v!r}"
                raise UsageError(msg)
            out[k] = v
        elif v is None or isinstance(v, (dict, list, bool)):
            msg = f"config '{k}' must be a string, got {v!r}"
            raise UsageError(msg)
        else:
            out[k] = str(v)
    return out


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from path (or ./nostd-matrix.yaml if present). Missing default file means defaults."""
    if path is None:
        path = Path.cwd() / CONFIG_FILE_NAME
        if not path.is_file():
            return resolve_config(None)
    elif not path.is_file():
        msg = f"config file not found: {path}"
        raise UsageError(msg)
    with path.open() as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"invalid YAML in {path}: {e}"
            raise UsageError(msg) from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at top level"
        raise UsageError(msg)
    return resolve_config(data)
