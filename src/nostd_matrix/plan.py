"""Two-tier (core, alloc) build plan from classified packages.

Rows are emitted in classifier order (by package name) and the argument
lists depend only on each package's feature names, so the same workspace
always yields a byte-identical plan.
"""

from __future__ import annotations

from typing import Any

from nostd_matrix.classify import classify_packages
from nostd_matrix.features import feature_extras, has_alloc

TIERS = ("core", "alloc")
NO_DEFAULT = "--no-default-features"


def core_args(extras: list[str]) -> list[str]:
    if not extras:
        return [NO_DEFAULT]
    return [NO_DEFAULT, "--features", ",".join(extras)]


def alloc_args(extras: list[str]) -> list[str]:
    """`alloc` first, then extras in sorted order."""
    return [NO_DEFAULT, "--features", ",".join(["alloc", *extras])]


def build_plan(packages: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Return {"core": [row...], "alloc": [row...]} with row = {"package", "args"}."""
    core: list[dict[str, Any]] = []
    alloc: list[dict[str, Any]] = []
    for pkg in packages:
        features = pkg.get("features")
        extras = feature_extras(features)
        core.append({"package": pkg["name"], "args": core_args(extras)})
        if has_alloc(features):
            alloc.append({"package": pkg["name"], "args": alloc_args(extras)})
    return {"core": core, "alloc": alloc}


def generate_plan(metadata: dict[str, Any]) -> dict[str, list[dict[str, Any]]]:
    """Classify workspace metadata and build its plan."""
    return build_plan(classify_packages(metadata))
