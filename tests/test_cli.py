"""Tests for the CLI entry point."""

import json
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from git_state.cli import app

runner = CliRunner()


def wt(repo) -> Path:
    return Path(repo.working_tree_dir)


class TestCli:
    def test_loads_env(self, repo):
        with patch("dotenv.load_dotenv") as mock_ld:
            result = runner.invoke(app, [str(wt(repo))])
        assert result.exit_code == 0
        mock_ld.assert_called_once()

    def test_human_output(self, repo):
        (wt(repo) / "a.txt").write_text("changed\n")
        result = runner.invoke(app, [str(wt(repo))])
        assert result.exit_code == 0
        assert "branch:" in result.stdout
        assert "main" in result.stdout
        assert "upstream:  (none)" in result.stdout
        assert "behind:    ?" in result.stdout
        assert "dirty:     1" in result.stdout
        assert "Initial commit" in result.stdout

    def test_json_output(self, repo):
        result = runner.invoke(app, [str(wt(repo)), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["branch"] == "main"
        assert data["remote_branch"] is None
        assert data["ahead"] == 1
        assert data["behind"] is None
        assert data["stashes"] == 0
        assert data["commit"] == repo.git.rev_parse("--short", "HEAD")
        assert data["message"] == "Initial commit\n\nAdds three files."

    def test_json_empty_repository(self, empty_repo):
        result = runner.invoke(app, [str(empty_repo), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["branch"] is None
        assert "commit" not in data

    def test_not_a_repository(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 2
        assert "not a git repository" in result.output

    def test_output_cap_option(self, repo):
        result = runner.invoke(app, [str(wt(repo)), "--max-output-size", "1"])
        assert result.exit_code == 1
        assert "error:" in result.output

    def test_output_cap_from_env(self, repo, monkeypatch):
        monkeypatch.setenv("GIT_STATE_MAX_OUTPUT_SIZE", "1")
        result = runner.invoke(app, [str(wt(repo))])
        assert result.exit_code == 1

    def test_option_overrides_env(self, repo, monkeypatch):
        monkeypatch.setenv("GIT_STATE_MAX_OUTPUT_SIZE", "1")
        result = runner.invoke(app, [str(wt(repo)), "--max-output-size", "0"])
        assert result.exit_code == 0

    def test_invalid_env(self, repo, monkeypatch):
        monkeypatch.setenv("GIT_STATE_MAX_OUTPUT_SIZE", "lots")
        result = runner.invoke(app, [str(wt(repo))])
        assert result.exit_code == 2
