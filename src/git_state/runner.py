"""Runs git commands and enforces the output cap."""

import logging
import os
import re
import threading
from typing import BinaryIO, Optional, Union

import git  # GitPython

from git_state.exceptions import CommandFailedError, OutputTooLargeError
from git_state.models import InspectorConfig

logger = logging.getLogger(__name__)

# \r\n on Windows, \n elsewhere
EOL = re.compile(r"\r?\n")

GIT_ENV = {"GIT_TERMINAL_PROMPT": "0"}  # Never prompt for credentials

# Fails when the repository has no refs yet (no commits).
REF_PROBE = ["show-ref"]

CHUNK_SIZE = 64 * 1024

RepoPath = Union[str, os.PathLike]


def read_capped(
    stream: BinaryIO, limit: Optional[int], chunk_size: int = CHUNK_SIZE
) -> tuple[bytes, bool]:
    """Read *stream* to EOF, or stop as soon as more than *limit* bytes arrive.

    Returns the bytes read and whether the limit was crossed.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return b"".join(chunks), False
        chunks.append(chunk)
        size += len(chunk)
        if limit is not None and size > limit:
            return b"".join(chunks), True


def _decode(value: bytes) -> str:
    return value.decode("utf-8", errors="replace")


def run_git(
    repo_path: RepoPath,
    args: list[str],
    config: Optional[InspectorConfig] = None,
) -> str:
    """Run ``git <args>`` inside *repo_path* and return its raw stdout.

    stdout and stderr are read incrementally; once either passes
    ``config.max_output_size`` the process is killed.

    Raises:
        OutputTooLargeError: stdout or stderr exceeded ``config.max_output_size``.
            Takes precedence over the exit status.
        CommandFailedError: git exited non-zero or could not be started.
    """
    config = config or InspectorConfig()
    limit = config.max_output_size
    argv = ["git", *args]
    command = " ".join(argv)
    logger.debug("Running `%s` in %s", command, repo_path)

    # GitPython silently falls back to the process cwd when the directory is
    # missing or not traversable.
    if not os.path.isdir(repo_path) or not os.access(repo_path, os.X_OK):
        raise CommandFailedError(
            command, stderr=f"not an accessible directory: {os.fspath(repo_path)}"
        )

    try:
        process = git.Git(os.fspath(repo_path)).execute(
            argv, as_process=True, env=GIT_ENV
        )
    except (git.exc.GitCommandNotFound, OSError) as exc:
        raise CommandFailedError(command, stderr=str(exc)) from exc

    popen = process.proc
    stderr_result: dict[str, tuple[bytes, bool]] = {}

    def drain_stderr() -> None:
        stderr_result["value"] = read_capped(popen.stderr, limit)
        if stderr_result["value"][1]:
            popen.kill()

    reader = threading.Thread(target=drain_stderr, daemon=True)
    reader.start()
    try:
        stdout, stdout_over = read_capped(popen.stdout, limit)
        if stdout_over:
            popen.kill()
        reader.join()
        status = popen.wait()
    finally:
        for stream in (popen.stdout, popen.stderr):
            if stream is not None:
                stream.close()

    stderr, stderr_over = stderr_result.get("value", (b"", False))
    if stdout_over or stderr_over:
        size = len(stdout) if stdout_over else len(stderr)
        raise OutputTooLargeError(command, limit, size)

    if status != 0:
        raise CommandFailedError(command, status, _decode(stderr).strip())
    return _decode(stdout)


def run_after_probe(
    repo_path: RepoPath,
    args: list[str],
    config: Optional[InspectorConfig] = None,
) -> str:
    """Run ``git <args>`` only if ``git show-ref`` succeeds first.

    The probe's output is thrown away, only its exit status counts, so it
    is not subject to the output cap.
    """
    run_git(repo_path, REF_PROBE, InspectorConfig(max_output_size=None))
    return run_git(repo_path, args, config)


def count_lines(text: str) -> int:
    """Number of non-empty lines; 0 for empty output."""
    return sum(1 for line in EOL.split(text.strip()) if line)
