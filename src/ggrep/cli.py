"""Typer CLI for ggrep."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from result import Err

from ggrep.config import Config
from ggrep.data.git import check_repository, command_line
from ggrep.models.query import Query, SearchFlag

app = typer.Typer(
    name="ggrep",
    help="Interactive terminal front-end for git grep.",
    add_completion=False,
)


@app.command()
def main(
    pattern: Annotated[str, typer.Argument(help="Initial search pattern")] = "",
    ignore_case: Annotated[bool, typer.Option("--ignore-case", "-i")] = False,
    fixed_strings: Annotated[bool, typer.Option("--fixed-strings", "-F")] = False,
    word_regexp: Annotated[bool, typer.Option("--word-regexp", "-w")] = False,
    invert_match: Annotated[bool, typer.Option("--invert-match", "-v")] = False,
    extended_regexp: Annotated[bool, typer.Option("--extended-regexp", "-E")] = False,
    perl_regexp: Annotated[bool, typer.Option("--perl-regexp", "-P")] = False,
    untracked: Annotated[bool, typer.Option("--untracked")] = False,
    no_index: Annotated[bool, typer.Option("--no-index")] = False,
    revision: Annotated[
        str, typer.Option("--revision", "-r", help="Search this revision")
    ] = "",
    path: Annotated[str, typer.Option("--path", "-p", help="Limit the search to a pathspec")] = "",
    repo: Annotated[
        Path | None, typer.Option("--repo", help="Repository directory (default: cwd)")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Debug logging to the log file")] = False,
) -> None:
    """Compose a git grep search interactively and browse its matches."""
    config = Config(
        repo_dir=repo or Path.cwd(),
        log_level="DEBUG" if verbose else "WARNING",
    )

    checked = check_repository(config)
    if isinstance(checked, Err):
        typer.echo(f"error: {checked.err_value}", err=True)
        raise typer.Exit(code=1)

    selected = {
        SearchFlag.IGNORE_CASE: ignore_case,
        SearchFlag.FIXED_STRINGS: fixed_strings,
        SearchFlag.WORD_REGEXP: word_regexp,
        SearchFlag.INVERT_MATCH: invert_match,
        SearchFlag.EXTENDED_REGEXP: extended_regexp,
        SearchFlag.PERL_REGEXP: perl_regexp,
        SearchFlag.UNTRACKED: untracked,
        SearchFlag.NO_INDEX: no_index,
    }
    flags = SearchFlag(0)
    for flag, enabled in selected.items():
        if enabled:
            flags |= flag
    query = Query.from_pattern(pattern, flags=flags, revision=revision, pathspec=path)

    from ggrep.ui.app import run_app

    summary = run_app(config, query)
    if summary.last_committed_query is not None:
        typer.echo(command_line(summary.last_committed_query, config.git_executable))
