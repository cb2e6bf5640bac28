"""Pytest fixtures for nostd-matrix tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest


def make_package(
    name: str,
    features: dict[str, list[str]] | None = None,
    kinds: list[list[str]] | None = None,
) -> dict[str, Any]:
    """Package entry shaped like `cargo metadata` output."""
    if kinds is None:
        kinds = [["lib"]]
    return {
        "id": f"path+file:///ws/{name}#0.1.0",
        "name": name,
        "features": features,
        "targets": [{"kind": k, "name": name} for k in kinds],
    }


@pytest.fixture
def metadata_doc() -> dict[str, Any]:
    """Workspace with a plain lib, an alloc-capable lib, a proc-macro crate and one external dep."""
    members = [
        make_package("zeta", {"default": ["std"], "std": [], "alloc": [], "serde": []}),
        make_package("alpha", {"default": [], "foo": []}),
        make_package("alpha_macros", {}, kinds=[["proc-macro"]]),
    ]
    external = make_package("serde", {"alloc": [], "std": []})
    external["id"] = "registry+https://github.com/rust-lang/crates.io-index#serde@1.0.0"
    return {
        "packages": [*members, external],
        "workspace_members": [p["id"] for p in members],
    }


class FakeRunner:
    """Records argv and returns queued (returncode, output) results; defaults to success."""

    def __init__(self, results: list[tuple[int, str]] | None = None) -> None:
        self.calls: list[list[str]] = []
        self.results = list(results or [])

    def __call__(self, argv: Sequence[str]) -> tuple[int, str]:
        self.calls.append(list(argv))
        if self.results:
            return self.results.pop(0)
        return 0, ""


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
