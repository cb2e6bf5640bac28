"""Workspace metadata: parse a supplied `cargo metadata` document or query cargo for one."""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from nostd_matrix.errors import MetadataError

log = logging.getLogger(__name__)


def _run(cmd: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(cmd, capture_output=True, text=True)


def validate_metadata(doc: Any) -> dict[str, Any]:
    """Check minimal shape {packages: [{id, name, targets}], workspace_members: [id]}. Raises MetadataError."""
    if not isinstance(doc, dict):
        msg = "metadata must be a JSON object"
        raise MetadataError(msg)
    packages = doc.get("packages")
    members = doc.get("workspace_members")
    if not isinstance(packages, list):
        msg = "metadata missing 'packages' list"
        raise MetadataError(msg)
    if not isinstance(members, list):
        msg = "metadata missing 'workspace_members' list"
        raise MetadataError(msg)
    if not all(isinstance(m, str) for m in members):
        msg = "workspace_members must contain only string ids"
        raise MetadataError(msg)
    for i, pkg in enumerate(packages):
        if not isinstance(pkg, dict):
            msg = f"packages[{i}] is not an object"
            raise MetadataError(msg)
        for key in ("id", "name"):
            if not isinstance(pkg.get(key), str):
                msg = f"packages[{i}] missing string '{key}'"
                raise MetadataError(msg)
        targets = pkg.get("targets")
        if not isinstance(targets, list):
            msg = f"package {pkg['name']} missing 'targets' list"
            raise MetadataError(msg)
        for t in targets:
            if not isinstance(t, dict) or not isinstance(t.get("kind"), list):
                msg = f"package {pkg['name']} has a target without a 'kind' list"
                raise MetadataError(msg)
            if not all(isinstance(k, str) for k in t["kind"]):
                msg = f"package {pkg['name']} has a target kind that is not a list of strings"
                raise MetadataError(msg)
        features = pkg.get("features")
        if features is not None and not isinstance(features, dict):
            msg = f"package {pkg['name']} has non-object 'features'"
            raise MetadataError(msg)
    return doc


def load_metadata(text: str) -> dict[str, Any]:
    """Parse and validate a metadata JSON document."""
    if not text.strip():
        msg = "metadata input is empty"
        raise MetadataError(msg)
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"metadata is not valid JSON: {e}"
        raise MetadataError(msg) from e
    return validate_metadata(doc)


def query_metadata(
    manifest_path: Path | None = None,
    cargo: str = "cargo",
) -> dict[str, Any]:
    """Run `cargo metadata --no-deps` (workspace only, no dependency resolution) and parse its output."""
    cmd = [cargo, "metadata", "--format-version", "1", "--no-deps"]
    if manifest_path is not None:
        cmd += ["--manifest-path", str(manifest_path)]
    log.debug("querying metadata: %s", " ".join(cmd))
    try:
        r = _run(cmd)
    except FileNotFoundError as e:
        msg = f"{cargo} not found in PATH"
        raise MetadataError(msg) from e
    if r.returncode != 0:
        msg = f"{' '.join(cmd)} failed: {(r.stderr or r.stdout).strip()}"
        raise MetadataError(msg)
    return load_metadata(r.stdout)
