"""Main CLI entry point for nostd-matrix."""

import logging
import os
import sys

from nostd_matrix.cli import generate_cmd, run_cmd


def _configure_logging() -> None:
    level = logging.DEBUG if os.environ.get("NOSTD_MATRIX_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Main CLI entry point."""
    _configure_logging()
    if len(sys.argv) < 2:
        print("Usage: nostd-matrix <command> [args...]", file=sys.stderr)
        print("Commands:", file=sys.stderr)
        print(
            "  generate       - Classify workspace crates and print the encoded core/alloc plan",
            file=sys.stderr,
        )
        print(
            "  check <tier>   - cargo check every row of tier (core|alloc) from the plan on stdin",
            file=sys.stderr,
        )
        print(
            "  build <tier>   - cargo build --release every row of tier from the plan on stdin",
            file=sys.stderr,
        )
        print("  show           - Decode the plan on stdin and print it as JSON", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]
    args = sys.argv[2:]

    if command == "generate":
        sys.exit(generate_cmd.run_generate_argv(args))
    elif command in ("check", "build"):
        sys.exit(run_cmd.run_action_argv(command, args))
    elif command == "show":
        sys.exit(run_cmd.run_show_argv(args))
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
