"""CLI entry point for git-state."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from git_state.exceptions import GitStateError
from git_state.inspector import check, commit, is_repository, message
from git_state.models import InspectorConfig, RepositoryReport

app = typer.Typer(add_completion=False, help="Show the status of a git working tree.")


def _format_count(value: Optional[int]) -> str:
    return "?" if value is None else str(value)


def _render(data: dict[str, Any]) -> str:
    rows = [
        ("branch", data["branch"] or "(no commits)"),
        ("upstream", data["remote_branch"] or "(none)"),
        ("ahead", _format_count(data["ahead"])),
        ("behind", _format_count(data["behind"])),
        ("dirty", str(data["dirty"])),
        ("untracked", str(data["untracked"])),
        ("stashes", str(data["stashes"])),
    ]
    if data.get("commit"):
        rows.append(("commit", data["commit"]))
        rows.append(("message", data["message"].splitlines()[0] if data["message"] else ""))
    width = max(len(label) for label, _ in rows) + 1
    return "\n".join(f"{label + ':':<{width}} {value}" for label, value in rows)


@app.command()
def main(
    path: Path = typer.Argument(Path("."), help="Working tree to inspect."),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON object."),
    max_output_size: Optional[int] = typer.Option(
        None,
        "--max-output-size",
        min=0,
        help="Cap on captured git output in bytes (0 disables it).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git commands."),
) -> None:
    """Print branch, upstream, ahead/behind, dirty/untracked and stash counts."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. GIT_STATE_MAX_OUTPUT_SIZE)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = InspectorConfig.from_env()
    except ValidationError as exc:
        typer.echo(f"error: invalid GIT_STATE_MAX_OUTPUT_SIZE: {exc}", err=True)
        raise typer.Exit(code=2)
    if max_output_size is not None:
        config = InspectorConfig(max_output_size=max_output_size or None)

    if not is_repository(path):
        typer.echo(f"error: {path} is not a git repository", err=True)
        raise typer.Exit(code=2)

    try:
        report: RepositoryReport = check(path, config)
        data = report.to_display_dict()
        if report.branch is not None:
            data["commit"] = commit(path, config)
            data["message"] = message(path, config)
    except GitStateError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(_render(data))


if __name__ == "__main__":
    app()
