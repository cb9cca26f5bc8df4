"""Blocking repository queries.

Each function runs git once (``behind`` runs ``remote_branch`` first) and
parses the plain-text output into a small value. Failure handling differs
on purpose:

* ``branch`` / ``remote_branch`` return ``None`` when git cannot resolve the
  ref (no commits yet, no upstream configured).
* ``ahead`` / ``behind`` return NaN when git fails; these counts are
  routinely asked of fresh clones, detached heads and untracked branches.
* ``status``, ``commit``, ``stashes`` and ``message`` raise.

An :class:`~git_state.exceptions.OutputTooLargeError` always propagates.
"""

import logging
from pathlib import Path

from git_state.exceptions import CommandFailedError
from git_state.models import (
    NAN,
    ConfigLike,
    Count,
    InspectorConfig,
    RepositoryReport,
    StatusCounts,
)
from git_state.runner import EOL, RepoPath, count_lines, run_after_probe, run_git

logger = logging.getLogger(__name__)

UNTRACKED_MARKER = "??"


def is_repository(repo_path: RepoPath) -> bool:
    """True if *repo_path* holds a ``.git`` entry. Never raises."""
    try:
        return (Path(repo_path) / ".git").exists()
    except (OSError, ValueError):
        return False


# ── Refs ──────────────────────────────────────────────────────────────────

def branch(repo_path: RepoPath, config: ConfigLike = None) -> str | None:
    """Short name of the checked-out branch, or None before the first commit."""
    config = InspectorConfig.coerce(config)
    try:
        out = run_after_probe(repo_path, ["rev-parse", "--abbrev-ref", "HEAD"], config)
    except CommandFailedError as exc:
        logger.debug("No branch for %s: %s", repo_path, exc)
        return None
    return out.strip()


def remote_branch(repo_path: RepoPath, config: ConfigLike = None) -> str | None:
    """Short name of the upstream branch (e.g. ``origin/main``), or None."""
    config = InspectorConfig.coerce(config)
    try:
        out = run_after_probe(
            repo_path,
            ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"],
            config,
        )
    except CommandFailedError as exc:
        logger.debug("No upstream for %s: %s", repo_path, exc)
        return None
    return out.strip()


# ── Ahead / behind ────────────────────────────────────────────────────────

def ahead(repo_path: RepoPath, config: ConfigLike = None) -> Count:
    """Commits on HEAD that no remote-tracking ref contains (NaN if unknown)."""
    config = InspectorConfig.coerce(config)
    try:
        out = run_after_probe(repo_path, ["rev-list", "HEAD", "--not", "--remotes"], config)
    except CommandFailedError as exc:
        logger.debug("Ahead count indeterminate for %s: %s", repo_path, exc)
        return NAN
    return count_lines(out)


def behind(repo_path: RepoPath, config: ConfigLike = None) -> Count:
    """Commits on the upstream branch that HEAD lacks (NaN if unknown)."""
    config = InspectorConfig.coerce(config)
    remote = remote_branch(repo_path, config)
    if remote is None:
        logger.debug("Behind count indeterminate for %s: no upstream", repo_path)
        return NAN
    try:
        out = run_after_probe(repo_path, ["rev-list", f"HEAD..{remote}"], config)
    except CommandFailedError as exc:
        logger.debug("Behind count indeterminate for %s: %s", repo_path, exc)
        return NAN
    return count_lines(out)


# ── Working tree ──────────────────────────────────────────────────────────

def status(repo_path: RepoPath, config: ConfigLike = None) -> StatusCounts:
    """Dirty and untracked file counts from ``git status -s``."""
    config = InspectorConfig.coerce(config)
    out = run_git(repo_path, ["status", "-s"], config)
    dirty_count = 0
    untracked_count = 0
    for line in EOL.split(out):
        if not line.strip():
            continue
        if line[:2] == UNTRACKED_MARKER:
            untracked_count += 1
        else:
            dirty_count += 1
    return StatusCounts(dirty=dirty_count, untracked=untracked_count)


def dirty(repo_path: RepoPath, config: ConfigLike = None) -> int:
    return status(repo_path, config).dirty


def untracked(repo_path: RepoPath, config: ConfigLike = None) -> int:
    return status(repo_path, config).untracked


def stashes(repo_path: RepoPath, config: ConfigLike = None) -> int:
    """Number of stash entries."""
    config = InspectorConfig.coerce(config)
    return count_lines(run_git(repo_path, ["stash", "list"], config))


# ── Last commit ───────────────────────────────────────────────────────────

def commit(repo_path: RepoPath, config: ConfigLike = None) -> str:
    """Abbreviated hash of HEAD. Raises on a repository without commits."""
    config = InspectorConfig.coerce(config)
    return run_git(repo_path, ["rev-parse", "--short", "HEAD"], config).strip()


def message(repo_path: RepoPath, config: ConfigLike = None) -> str:
    """Full message of the last commit, trimmed."""
    config = InspectorConfig.coerce(config)
    return run_git(repo_path, ["log", "-1", "--pretty=%B"], config).strip()


# ── Aggregate ─────────────────────────────────────────────────────────────

def check(repo_path: RepoPath, config: ConfigLike = None) -> RepositoryReport:
    """Run every status query in turn and merge the results.

    The first error raised by a constituent query propagates; no partial
    report is returned.
    """
    config = InspectorConfig.coerce(config)
    counts = status(repo_path, config)
    return RepositoryReport(
        branch=branch(repo_path, config),
        remote_branch=remote_branch(repo_path, config),
        ahead=ahead(repo_path, config),
        behind=behind(repo_path, config),
        dirty=counts.dirty,
        untracked=counts.untracked,
        stashes=stashes(repo_path, config),
    )
