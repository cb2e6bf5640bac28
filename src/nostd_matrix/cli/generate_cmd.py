"""CLI for plan generation: nostd-matrix generate [options]."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from nostd_matrix.cli.parse_common import choice, parse_flags, path_resolver, read_stream
from nostd_matrix.config import load_config
from nostd_matrix.errors import MetadataError, NoStdMatrixError, UsageError
from nostd_matrix.metadata import load_metadata, query_metadata
from nostd_matrix.plan import generate_plan
from nostd_matrix.transport import ENCODINGS, encode_plan

log = logging.getLogger(__name__)

USAGE = (
    "Usage: nostd-matrix generate [--metadata PATH|-] [--encoding json|base64] "
    "[--manifest-path PATH] [--github-output NAME] [--config PATH]"
)


def write_github_output(name: str, value: str) -> Path:
    """Append name=value to the file named by GITHUB_OUTPUT."""
    out = os.environ.get("GITHUB_OUTPUT", "")
    if not out:
        msg = "--github-output requires the GITHUB_OUTPUT environment variable"
        raise UsageError(msg)
    p = Path(out)
    with p.open("a") as f:
        f.write(f"{name}={value}\n")
    return p


def generate(
    metadata_source: str | None,
    encoding: str,
    *,
    manifest_path: Path | None = None,
    cargo: str = "cargo",
    stdin: TextIO | None = None,
) -> str:
    """Load metadata (stdin for "-", a file path, or cargo metadata when None) and return the encoded plan."""
    if encoding not in ENCODINGS:
        msg = f"unknown encoding {encoding!r} (expected one of: {', '.join(ENCODINGS)})"
        raise UsageError(msg)
    if metadata_source == "-":
        log.debug("reading metadata from stdin")
        metadata = load_metadata(read_stream(stdin, MetadataError, "metadata input"))
    elif metadata_source is not None:
        log.debug("reading metadata from %s", metadata_source)
        try:
            text = Path(metadata_source).read_text()
        except OSError as e:
            msg = f"cannot read metadata file {metadata_source}: {e}"
            raise UsageError(msg) from e
        except UnicodeDecodeError as e:
            msg = f"metadata file {metadata_source} is not valid UTF-8: {e}"
            raise MetadataError(msg) from e
        metadata = load_metadata(text)
    else:
        metadata = query_metadata(manifest_path, cargo=cargo)
    plan = generate_plan(metadata)
    log.debug("plan: %d core rows, %d alloc rows", len(plan["core"]), len(plan["alloc"]))
    return encode_plan(plan, encoding)


def run_generate_argv(argv: list[str], stdin: TextIO | None = None) -> int:
    """Parse argv, print the encoded plan to stdout. Returns 0/1."""
    try:
        parsed, rest = parse_flags(
            argv,
            ("metadata", "--metadata", None, None),
            ("encoding", "--encoding", None, choice(*ENCODINGS)),
            ("manifest_path", "--manifest-path", None, path_resolver),
            ("github_output", "--github-output", None, None),
            ("config", "--config", None, path_resolver),
        )
        if rest:
            print(f"Error: unexpected arguments: {' '.join(rest)}", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            return 1
        cfg = load_config(parsed["config"])
        payload = generate(
            parsed["metadata"],
            parsed["encoding"] or cfg["encoding"],
            manifest_path=parsed["manifest_path"],
            cargo=cfg["cargo"],
            stdin=stdin,
        )
        if parsed["github_output"]:
            write_github_output(parsed["github_output"], payload)
    except NoStdMatrixError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(payload)
    return 0
