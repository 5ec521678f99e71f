"""git grep invocation: argument building, command echo and subprocess execution."""

from __future__ import annotations

import asyncio
import logging
import shlex
import subprocess
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from ggrep.models.query import FLAG_OPTION_BY_FLAG, FLAG_OPTIONS, Query, SearchFlag, iter_flags

if TYPE_CHECKING:
    from ggrep.config import Config

logger = logging.getLogger(__name__)

# Options always present; the echoed command keeps them so it reproduces line numbers.
_BASE_OPTIONS = ["-n", "-I"]
_IGNORED_OPTIONS = {"-n", "-I", "-nI", "--line-number", "--no-color"}
_OPTION_TO_FLAG: dict[str, SearchFlag] = {
    **{item.option: item.flag for item in FLAG_OPTIONS},
    **{item.short: item.flag for item in FLAG_OPTIONS if item.short},
}


def build_grep_args(query: Query, *, for_display: bool = False) -> list[str]:
    """Arguments following ``git`` for searching with ``query``.

    The display form is what gets echoed to the user; the execution form adds
    options that keep the output machine-parseable (no colour, unquoted paths).
    """
    args = [] if for_display else ["-c", "core.quotePath=false"]
    args.append("grep")
    args.extend(_BASE_OPTIONS)
    if not for_display:
        args.append("--no-color")
    args.extend(FLAG_OPTION_BY_FLAG[flag].option for flag in iter_flags(query.flags))
    args.extend(["-e", query.pattern])
    if query.revision:
        args.append(query.revision)
    if query.pathspec:
        args.extend(["--", query.pathspec])
    return args


def command_line(query: Query, git_executable: str = "git") -> str:
    """Shell-quoted command line equivalent to searching with ``query``."""
    return shlex.join([git_executable, *build_grep_args(query, for_display=True)])


def parse_command_line(text: str) -> Query:
    """Recover a query from a command line produced by :func:`command_line`.

    Raises:
        ValueError: If ``text`` is not a git grep command this module understands.
    """
    tokens = shlex.split(text)
    if len(tokens) < 2 or tokens[1] != "grep":
        raise ValueError(f"Not a git grep command: {text!r}")

    flags = SearchFlag(0)
    pattern: str | None = None
    revision = ""
    pathspec = ""
    rest = iter(tokens[2:])
    for token in rest:
        if token in _IGNORED_OPTIONS:
            continue
        if token in _OPTION_TO_FLAG:
            flags |= _OPTION_TO_FLAG[token]
        elif token == "-e":
            pattern = next(rest, None)
            if pattern is None:
                raise ValueError("Option -e requires a pattern")
        elif token == "--":
            pathspec = " ".join(rest)
        elif token.startswith("-"):
            raise ValueError(f"Unsupported git grep option: {token}")
        elif pattern is None:
            pattern = token
        elif not revision:
            revision = token
        else:
            raise ValueError(f"Unexpected argument: {token}")

    if pattern is None:
        raise ValueError("No pattern given")
    return Query.from_pattern(pattern, flags=flags, revision=revision, pathspec=pathspec)


def check_repository(config: Config) -> Result[str, str]:
    """Check that git runs and ``config.repo_dir`` is inside a work tree.

    Returns the git version string on success.
    """
    try:
        version = subprocess.run(  # noqa: S603
            [config.git_executable, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if version.returncode != 0:
            return Err(f"`{config.git_executable} --version` failed: {version.stderr.strip()}")

        inside = subprocess.run(  # noqa: S603
            [config.git_executable, "rev-parse", "--is-inside-work-tree"],
            capture_output=True,
            text=True,
            timeout=10,
            cwd=config.repo_dir,
        )
    except FileNotFoundError:
        return Err(f"no `{config.git_executable}` command found")
    except subprocess.TimeoutExpired:
        return Err("git command timed out")
    except OSError as exc:
        return Err(f"Error running git: {exc}")

    if inside.returncode != 0 or inside.stdout.strip() != "true":
        message = inside.stderr.strip() or f"not a Git directory: {config.repo_dir}"
        return Err(message)
    return Ok(version.stdout.strip())


class GitGrep:
    """Runs git grep as a subprocess for one query at a time."""

    def __init__(self, config: Config) -> None:
        self._config = config

    async def grep(self, query: Query) -> Result[list[str], str]:
        """Run git grep and return its stdout lines.

        Exit status 1 means "no matches" and is reported as an empty success.
        """
        cmd = [self._config.git_executable, *build_grep_args(query)]
        logger.debug("Running git command: %s", shlex.join(cmd))

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(self._config.repo_dir),
            )
        except OSError as exc:
            return Err(f"Failed to execute `{shlex.join(cmd)}`: {exc}")

        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            raise

        if proc.returncode not in (0, 1):
            message = stderr.decode("utf-8", errors="replace").strip()
            logger.info("git grep failed with code %s: %s", proc.returncode, message)
            return Err(message or f"git grep exited with status {proc.returncode}")
        return Ok(stdout.decode("utf-8", errors="replace").splitlines())
