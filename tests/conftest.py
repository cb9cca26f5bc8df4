"""Pytest configuration and fixtures."""

from pathlib import Path

import git
import pytest


def init_repo(path: Path) -> git.Repo:
    """git init with a local identity so commits and stashes work anywhere."""
    return configure(git.Repo.init(path, initial_branch="main"))


def configure(repo: git.Repo) -> git.Repo:
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test Author")
        cw.set_value("user", "email", "dev@test.com")
        cw.set_value("commit", "gpgsign", "false")
    return repo


def commit_file(repo: git.Repo, name: str, content: str, msg: str) -> None:
    (Path(repo.working_tree_dir) / name).write_text(content)
    repo.git.add(name)
    repo.git.commit("-m", msg)


@pytest.fixture
def empty_repo(tmp_path):
    """A freshly initialized repository without commits."""
    init_repo(tmp_path / "empty")
    return tmp_path / "empty"


@pytest.fixture
def repo(tmp_path):
    """A repository with one commit (a.txt, b.txt, c.txt) and no remote."""
    r = init_repo(tmp_path / "local")
    wt = Path(r.working_tree_dir)
    for name in ("a.txt", "b.txt", "c.txt"):
        (wt / name).write_text(f"{name}\n")
    r.git.add("--all")
    r.git.commit("-m", "Initial commit\n\nAdds three files.")
    return r


@pytest.fixture
def tracked_repo(tmp_path):
    """(origin, clone): a clone whose ``main`` tracks ``origin/main``."""
    origin = init_repo(tmp_path / "origin")
    commit_file(origin, "README.md", "# Hello\n", "Initial commit")
    clone = configure(git.Repo.clone_from(str(tmp_path / "origin"), str(tmp_path / "clone")))
    return origin, clone
