"""Select the workspace packages worth checking under no_std."""

from __future__ import annotations

import logging
from typing import Any

log = logging.getLogger(__name__)

PROC_MACRO_KIND = "proc-macro"


def is_proc_macro_only(targets: list[dict[str, Any]]) -> bool:
    """True if targets is non-empty and every target kind is only proc-macro. Empty targets is not."""
    if not targets:
        return False
    return all(set(t.get("kind") or []) == {PROC_MACRO_KIND} for t in targets)


def classify_packages(metadata: dict[str, Any]) -> list[dict[str, Any]]:
    """Workspace members that are not proc-macro-only, projected to {id, name, features, targets}, sorted by name."""
    members = set(metadata["workspace_members"])
    out: list[dict[str, Any]] = []
    for pkg in metadata["packages"]:
        if pkg["id"] not in members:
            continue
        targets = pkg.get("targets") or []
        if is_proc_macro_only(targets):
            log.debug("skipping proc-macro crate %s", pkg["name"])
            continue
        out.append(
            {
                "id": pkg["id"],
                "name": pkg["name"],
                "features": pkg.get("features"),
                "targets": targets,
            }
        )
    out.sort(key=lambda p: p["name"])
    log.debug("classified %d of %d packages", len(out), len(metadata["packages"]))
    return out
