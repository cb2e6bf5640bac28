"""Shared CLI helpers for nostd-matrix subcommands: flag parsing and stdin reading."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TextIO

from nostd_matrix.errors import NoStdMatrixError, UsageError

FlagSpec = tuple[str, str, Any, Callable[[str], Any] | None]


def parse_flags(argv: list[str], *specs: FlagSpec) -> tuple[dict[str, Any], list[str]]:
    """Pull `--flag value` / `--flag=value` options out of argv; everything else is positional.

    Each spec is (key, flag, default, converter); a callable default is called.
    A known flag with no value raises UsageError.
    """
    by_flag = {flag: (key, conv) for key, flag, _default, conv in specs}
    result: dict[str, Any] = {
        key: default() if callable(default) else default for key, _flag, default, _conv in specs
    }
    rest: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        flag, eq, inline = arg.partition("=")
        if flag not in by_flag:
            rest.append(arg)
            i += 1
            continue
        if eq:
            value = inline
            i += 1
        elif i + 1 < len(argv):
            value = argv[i + 1]
            i += 2
        else:
            msg = f"{flag} requires a value"
            raise UsageError(msg)
        key, conv = by_flag[flag]
        result[key] = conv(value) if conv else value
    return result, rest


def choice(*allowed: str) -> Callable[[str], str]:
    """Converter that rejects values outside allowed."""

    def convert(s: str) -> str:
        if s not in allowed:
            msg = f"invalid value {s!r} (expected one of: {', '.join(allowed)})"
            raise UsageError(msg)
        return s

    return convert


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --config, --manifest-path)."""
    return Path(s).resolve()


def read_stream(
    stream: TextIO | None,
    error_cls: type[NoStdMatrixError],
    what: str,
) -> str:
    """Read all of stream (stdin when None); undecodable bytes raise error_cls."""
    try:
        return (stream or sys.stdin).read()
    except UnicodeDecodeError as e:
        msg = f"{what} is not valid UTF-8: {e}"
        raise error_cls(msg) from e
