"""CLI for plan execution: nostd-matrix check|build <tier>, nostd-matrix show."""

from __future__ import annotations

import json
import os
import sys
from typing import TextIO

from nostd_matrix.cli.parse_common import choice, parse_flags, path_resolver, read_stream
from nostd_matrix.config import load_config
from nostd_matrix.driver import CommandRunner, execute
from nostd_matrix.errors import NoStdMatrixError, TransportDecodeError
from nostd_matrix.transport import ENCODINGS, decode_plan

DECODE_ENCODINGS = ("auto", *ENCODINGS)


def run_action_argv(
    action: str,
    argv: list[str],
    stdin: TextIO | None = None,
    runner: CommandRunner | None = None,
) -> int:
    """nostd-matrix <action> <tier> [--target TRIPLE] [--encoding auto|json|base64] [--config PATH]. Plan on stdin."""
    try:
        parsed, rest = parse_flags(
            argv,
            ("target", "--target", None, None),
            ("encoding", "--encoding", "auto", choice(*DECODE_ENCODINGS)),
            ("config", "--config", None, path_resolver),
        )
        if len(rest) != 1:
            print(
                f"Usage: nostd-matrix {action} <core|alloc> [--target TRIPLE] [--encoding auto|json|base64]",
                file=sys.stderr,
            )
            return 1
        cfg = load_config(parsed["config"])
        target = parsed["target"] or os.environ.get(cfg["target_env"], "")
        if not target:
            print(
                f"error: target triple required: set {cfg['target_env']} or pass --target",
                file=sys.stderr,
            )
            return 1
        payload = read_stream(stdin, TransportDecodeError, "plan input")
        return execute(
            payload,
            rest[0],
            action,
            target,
            runner=runner,
            encoding=parsed["encoding"],
            cargo=cfg["cargo"],
            locked=cfg["locked"],
        )
    except NoStdMatrixError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


def run_show_argv(argv: list[str], stdin: TextIO | None = None) -> int:
    """Decode the plan on stdin and pretty-print it."""
    try:
        parsed, _ = parse_flags(
            argv, ("encoding", "--encoding", "auto", choice(*DECODE_ENCODINGS))
        )
        payload = read_stream(stdin, TransportDecodeError, "plan input")
        plan = decode_plan(payload, parsed["encoding"])
    except NoStdMatrixError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(plan, indent=2))
    return 0
