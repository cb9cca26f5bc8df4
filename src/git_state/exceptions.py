"""Errors raised by git-state queries."""

from typing import Optional


class GitStateError(Exception):
    """Base class for every error this package raises."""


class OutputTooLargeError(GitStateError):
    """A git command produced more output than ``max_output_size`` allows.

    Never swallowed: even the best-effort queries (branch, ahead, ...)
    re-raise it.
    """

    def __init__(self, command: str, limit: int, size: int) -> None:
        self.command = command
        self.limit = limit
        self.size = size
        super().__init__(
            f"output of `{command}` exceeded {limit} bytes (read {size} before stopping)"
        )


class CommandFailedError(GitStateError):
    """git exited non-zero or could not be started at all."""

    def __init__(
        self, command: str, status: Optional[int] = None, stderr: str = ""
    ) -> None:
        self.command = command
        self.status = status  # None when git never ran
        self.stderr = stderr
        detail = f"`{command}` failed"
        if status is not None:
            detail += f" with exit code {status}"
        if stderr:
            detail += f": {stderr}"
        super().__init__(detail)
