"""Command functionality for githerd."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

import click
from rich.console import Console

from .collection import RepositoryCollection
from .config import Config
from .discovery import discover
from .errors import GitherdError
from .store import load, load_file, persist, print_paths

logger = logging.getLogger(__name__)


def scan(
    config: Config,
    root: Optional[Union[str, Path]] = None,
    min_depth: Optional[int] = None,
    max_depth: Optional[int] = None,
    save_to: Optional[str] = None,
    relative: bool = False,
) -> List[Path]:
    """Find repositories and print or save their paths.

    Args:
        config: githerd configuration.
        root: Directory to scan, the current directory by default.
        min_depth: Shallowest depth to report, from config by default.
        max_depth: Deepest depth to visit, from config by default.
        save_to: None prints paths to stdout, an empty string saves them to
            the configured paths file, anything else is the file to save to.
        relative: Report paths relative to the current directory.

    Returns:
        List[Path]: Paths that were found.
    """
    root = Path(root) if root is not None else Path.cwd()
    logger.debug("ENTER scan: root=%s save_to=%s relative=%s", root, save_to, relative)

    repos = discover(
        root,
        min_depth=config.min_depth if min_depth is None else min_depth,
        max_depth=config.max_depth if max_depth is None else max_depth,
        relative=relative,
        skip_names=config.skip_names,
        exclude_patterns=config.exclude_patterns,
    )

    if save_to is None:
        print_paths(repos)
    else:
        persist(repos, Path(save_to).expanduser() if save_to else config.get_paths_file())

    return repos


def load_repositories(
    config: Config,
    source: Optional[str] = None,
    console: Optional[Console] = None,
) -> RepositoryCollection:
    """Load repositories from stdin, the paths file or ``source``.

    Args:
        source: None reads stdin, an empty string reads the configured paths
            file, anything else is the file to read.
    """
    if source is None:
        logger.info("Reading repository paths from stdin")
        return load(
            click.get_text_stream("stdin"), git_binary=config.git_binary, console=console
        )
    path = Path(source).expanduser() if source else config.get_paths_file()
    return load_file(path, git_binary=config.git_binary, console=console)


def execute(
    config: Config,
    source: Optional[str] = None,
    porcelain: bool = False,
    find_marker: bool = False,
    print_marker: bool = False,
    marker: Optional[str] = None,
    with_author: Optional[str] = None,
    number: Optional[int] = None,
    cmd: Optional[str] = None,
    console: Optional[Console] = None,
) -> RepositoryCollection:
    """Load repositories and run the requested operations on all of them.

    Operations run in a fixed order: status, marker search, marker lines,
    commits by author, then the custom command.

    Args:
        with_author: None skips the author search, an empty string searches
            for each repository's configured user.
        cmd: Git arguments as one string, split on whitespace.

    Raises:
        GitherdError: If ``cmd`` holds no git arguments, before anything runs.
        ExecError: If git cannot be started for a repository.
    """
    args = cmd.split() if cmd is not None else None
    if args is not None and not args:
        raise GitherdError("Command must contain git arguments")

    repositories = load_repositories(config, source, console=console)
    marker = marker or config.history_marker
    number = config.commit_count if number is None else number

    if porcelain:
        repositories.status_summary()

    if find_marker:
        repositories.find_history_marker(marker)

    if print_marker:
        repositories.print_matching_history_lines(marker)

    if with_author is not None:
        repositories.recent_commits_by_author(number, with_author or None)

    if args is not None:
        repositories.run_command(args)
    else:
        logger.debug("Skipping custom command")

    return repositories
