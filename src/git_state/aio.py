"""Coroutine versions of the queries in :mod:`git_state.inspector`.

Each coroutine runs the blocking implementation in a worker thread, so the
semantics (return values, None/NaN fallbacks, raised errors) are identical.
"""

import asyncio

from git_state import inspector
from git_state.models import ConfigLike, Count, InspectorConfig, RepositoryReport, StatusCounts
from git_state.runner import RepoPath


async def is_repository(repo_path: RepoPath) -> bool:
    return await asyncio.to_thread(inspector.is_repository, repo_path)


async def branch(repo_path: RepoPath, config: ConfigLike = None) -> str | None:
    return await asyncio.to_thread(inspector.branch, repo_path, config)


async def remote_branch(repo_path: RepoPath, config: ConfigLike = None) -> str | None:
    return await asyncio.to_thread(inspector.remote_branch, repo_path, config)


async def ahead(repo_path: RepoPath, config: ConfigLike = None) -> Count:
    return await asyncio.to_thread(inspector.ahead, repo_path, config)


async def behind(repo_path: RepoPath, config: ConfigLike = None) -> Count:
    return await asyncio.to_thread(inspector.behind, repo_path, config)


async def status(repo_path: RepoPath, config: ConfigLike = None) -> StatusCounts:
    return await asyncio.to_thread(inspector.status, repo_path, config)


async def dirty(repo_path: RepoPath, config: ConfigLike = None) -> int:
    return (await status(repo_path, config)).dirty


async def untracked(repo_path: RepoPath, config: ConfigLike = None) -> int:
    return (await status(repo_path, config)).untracked


async def stashes(repo_path: RepoPath, config: ConfigLike = None) -> int:
    return await asyncio.to_thread(inspector.stashes, repo_path, config)


async def commit(repo_path: RepoPath, config: ConfigLike = None) -> str:
    return await asyncio.to_thread(inspector.commit, repo_path, config)


async def message(repo_path: RepoPath, config: ConfigLike = None) -> str:
    return await asyncio.to_thread(inspector.message, repo_path, config)


async def check(repo_path: RepoPath, config: ConfigLike = None) -> RepositoryReport:
    """Run the status queries concurrently and merge them into one report.

    If any of them raises, that error propagates and no report is built.
    """
    config = InspectorConfig.coerce(config)
    (
        branch_name,
        remote_name,
        ahead_count,
        behind_count,
        stash_count,
        counts,
    ) = await asyncio.gather(
        branch(repo_path, config),
        remote_branch(repo_path, config),
        ahead(repo_path, config),
        behind(repo_path, config),
        stashes(repo_path, config),
        status(repo_path, config),
    )
    return RepositoryReport(
        branch=branch_name,
        remote_branch=remote_name,
        ahead=ahead_count,
        behind=behind_count,
        dirty=counts.dirty,
        untracked=counts.untracked,
        stashes=stash_count,
    )
