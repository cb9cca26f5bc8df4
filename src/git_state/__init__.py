"""git-state — repository status queries on top of the git CLI.

Answers "which branch, how far ahead/behind, how dirty, how many stashes"
for a working tree by running one git command per fact and parsing its
plain-text output. Every query has a blocking form (this package /
``git_state.inspector``) and a coroutine form (``git_state.aio``).
"""

from git_state.exceptions import CommandFailedError, GitStateError, OutputTooLargeError
from git_state.inspector import (
    ahead,
    behind,
    branch,
    check,
    commit,
    dirty,
    is_repository,
    message,
    remote_branch,
    stashes,
    status,
    untracked,
)
from git_state.models import InspectorConfig, RepositoryReport, StatusCounts

__version__ = "0.1.0"

__all__ = [
    "CommandFailedError",
    "GitStateError",
    "InspectorConfig",
    "OutputTooLargeError",
    "RepositoryReport",
    "StatusCounts",
    "ahead",
    "behind",
    "branch",
    "check",
    "commit",
    "dirty",
    "is_repository",
    "message",
    "remote_branch",
    "stashes",
    "status",
    "untracked",
]
