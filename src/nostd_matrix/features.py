"""Per-package feature queries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

RESERVED_FEATURES = frozenset({"default", "std", "alloc"})


def feature_extras(features: Mapping[str, Any] | None) -> list[str]:
    """Sorted feature names minus default/std/alloc. None gives []."""
    if not features:
        return []
    return sorted(k for k in features if k not in RESERVED_FEATURES)


def has_alloc(features: Mapping[str, Any] | None) -> bool:
    """True when an `alloc` feature is declared (its implied list is irrelevant)."""
    return features is not None and "alloc" in features
