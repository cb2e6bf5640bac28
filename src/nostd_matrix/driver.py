"""Run a plan tier through cargo, one package at a time.

check and build share one executor; they differ in the cargo subcommand and
in what an empty tier means. An empty tier fails check (the generator
produced nothing) but is only a warning for build.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Callable, Sequence
from typing import Any

from nostd_matrix.errors import EmptyPlanError, ToolchainInvocationError, UsageError
from nostd_matrix.plan import TIERS
from nostd_matrix.transport import decode_plan

log = logging.getLogger(__name__)

# (argv) -> (returncode, captured output)
CommandRunner = Callable[[Sequence[str]], tuple[int, str]]

EMPTY_FAIL = "fail"
EMPTY_WARN = "warn"

ACTIONS: dict[str, dict[str, Any]] = {
    "check": {"name": "check", "command": ["check"], "empty_policy": EMPTY_FAIL},
    "build": {"name": "build", "command": ["build", "--release"], "empty_policy": EMPTY_WARN},
}


def subprocess_runner(argv: Sequence[str]) -> tuple[int, str]:
    """Run argv with stdout/stderr inherited so cargo output streams live. Output is not captured."""
    r = subprocess.run(list(argv))
    return r.returncode, ""


def select_rows(plan: dict[str, list[dict[str, Any]]], tier: str) -> list[dict[str, Any]]:
    if tier not in TIERS:
        msg = f"unknown tier {tier!r} (expected one of: {', '.join(TIERS)})"
        raise UsageError(msg)
    return plan[tier]


def cargo_argv(
    action: dict[str, Any],
    row: dict[str, Any],
    target: str,
    cargo: str = "cargo",
    locked: bool = False,
) -> list[str]:
    """cargo <command...> [--locked] -p <package> --target <target> <row args...>."""
    argv = [cargo, *action["command"]]
    if locked:
        argv.append("--locked")
    argv += ["-p", row["package"], "--target", target, *row["args"]]
    return argv


def progress_line(action: dict[str, Any], row: dict[str, Any], target: str) -> str:
    return f">> {action['name']}: {row['package']} @ {target} [{' '.join(row['args'])}]"


def execute(
    payload: str,
    tier: str,
    action_name: str,
    target: str,
    *,
    runner: CommandRunner | None = None,
    encoding: str = "auto",
    cargo: str = "cargo",
    locked: bool = False,
) -> int:
    """Decode payload, select tier, and run every row in order. Returns 0.

    Raises TransportDecodeError, UsageError, EmptyPlanError (check only) or
    ToolchainInvocationError on the first failing row; later rows never run.
    """
    if action_name not in ACTIONS:
        msg = f"unknown action {action_name!r} (expected one of: {', '.join(ACTIONS)})"
        raise UsageError(msg)
    action = ACTIONS[action_name]
    if not target:
        msg = "target triple is required"
        raise UsageError(msg)
    if runner is None:
        runner = subprocess_runner

    plan = decode_plan(payload, encoding)
    rows = select_rows(plan, tier)

    if not rows:
        if action["empty_policy"] == EMPTY_FAIL:
            msg = f"{tier} tier of the plan is empty; nothing to {action['name']}"
            raise EmptyPlanError(msg)
        print(f"Warning: {tier} tier of the plan is empty; nothing to {action['name']}", file=sys.stderr)
        return 0

    for row in rows:
        print(progress_line(action, row, target), flush=True)
        argv = cargo_argv(action, row, target, cargo=cargo, locked=locked)
        log.debug("running: %s", " ".join(argv))
        try:
            returncode, output = runner(argv)
        except FileNotFoundError as e:
            msg = f"{argv[0]} not found in PATH"
            raise ToolchainInvocationError(argv, 127, msg) from e
        if returncode != 0:
            if output:
                print(output, file=sys.stderr)
            raise ToolchainInvocationError(argv, returncode)
    return 0
