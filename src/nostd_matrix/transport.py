"""Plan wire format: compact JSON text, optionally base64-wrapped for single-line channels."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from nostd_matrix.errors import TransportDecodeError
from nostd_matrix.plan import TIERS

ENCODINGS = ("json", "base64")


def encode_plan(plan: dict[str, Any], encoding: str = "json") -> str:
    """Serialize plan as canonical JSON (sorted keys, no spaces); base64 wraps its UTF-8 bytes."""
    if encoding not in ENCODINGS:
        msg = f"unknown plan encoding: {encoding}"
        raise ValueError(msg)
    text = json.dumps(plan, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    if encoding == "json":
        return text
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _validate_plan(doc: Any) -> dict[str, list[dict[str, Any]]]:
    if not isinstance(doc, dict):
        msg = "plan must be a JSON object"
        raise TransportDecodeError(msg)
    for tier in TIERS:
        rows = doc.get(tier)
        if not isinstance(rows, list):
            msg = f"plan missing '{tier}' list"
            raise TransportDecodeError(msg)
        for i, row in enumerate(rows):
            if not isinstance(row, dict) or not isinstance(row.get("package"), str):
                msg = f"plan {tier}[{i}] missing string 'package'"
                raise TransportDecodeError(msg)
            args = row.get("args")
            if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
                msg = f"plan {tier}[{i}] 'args' must be a list of strings"
                raise TransportDecodeError(msg)
    return {tier: doc[tier] for tier in TIERS}


def _b64_to_text(payload: str) -> str:
    try:
        raw = base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        msg = f"plan is not valid base64: {e}"
        raise TransportDecodeError(msg) from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"decoded plan is not UTF-8: {e}"
        raise TransportDecodeError(msg) from e


def decode_plan(payload: str, encoding: str = "json") -> dict[str, list[dict[str, Any]]]:
    """Reverse encode_plan. encoding "auto" picks json when the payload starts with '{'.

    Raises TransportDecodeError on empty, truncated or malformed input; never returns an empty plan in its place.
    """
    if not payload or not payload.strip():
        msg = "plan payload is empty"
        raise TransportDecodeError(msg)
    if encoding == "auto":
        encoding = "json" if payload.lstrip().startswith("{") else "base64"
    if encoding not in ENCODINGS:
        msg = f"unknown plan encoding: {encoding}"
        raise TransportDecodeError(msg)
    text = payload if encoding == "json" else _b64_to_text(payload)
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"plan is not valid JSON ({encoding}): {e}"
        raise TransportDecodeError(msg) from e
    return _validate_plan(doc)
