"""Error kinds raised by the matrix pipeline. CLI helpers turn any of these into exit code 1."""

from __future__ import annotations


class NoStdMatrixError(Exception):
    """Base for every fatal pipeline condition."""


class MetadataError(NoStdMatrixError, ValueError):
    """Workspace metadata could not be obtained or does not have the expected shape."""


class TransportDecodeError(NoStdMatrixError, ValueError):
    """Encoded plan is empty, truncated or malformed."""


class UsageError(NoStdMatrixError, ValueError):
    """Bad command-line usage, e.g. an unknown tier selector."""


class EmptyPlanError(NoStdMatrixError):
    """Selected tier has no rows (fatal for check only)."""


class ToolchainInvocationError(NoStdMatrixError, RuntimeError):
    """A cargo invocation exited non-zero or could not be started."""

    def __init__(self, argv: list[str], returncode: int, message: str | None = None) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(message or f"{' '.join(argv)} failed with exit code {returncode}")
