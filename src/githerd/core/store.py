"""Saving and loading repository paths.

Paths are stored one per line, UTF-8, each line terminated by a newline,
with nothing else in the file. The same format is used on stdout and stdin
so ``githerd scan`` can be piped straight into ``githerd exec``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Iterable, Optional, Union

import click
from rich.console import Console

from .collection import RepositoryCollection
from .errors import PathStoreError
from .repository import GitRepository

logger = logging.getLogger(__name__)


def _to_text(path: Union[str, Path]) -> str:
    """Return ``path`` as a string that can be written as UTF-8.

    Raises:
        PathStoreError: If the path holds bytes that are not UTF-8.
    """
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeError as e:
        shown = os.fsencode(path).decode("utf-8", "replace")
        raise PathStoreError(f"Path is not valid UTF-8: {shown}") from e
    return text


def persist(paths: Iterable[Union[str, Path]], destination: Union[str, Path]) -> None:
    """Write ``paths`` to ``destination``, one per line.

    Every path is converted before the file is opened, so a bad path leaves
    an existing file untouched. The file is flushed and synced to disk before
    returning.

    Raises:
        PathStoreError: If a path is not valid UTF-8 or the file cannot be
            written.
    """
    destination = Path(destination)
    lines = [_to_text(path) for path in paths]
    logger.debug("Printing results to file %s", destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(f"{line}\n")
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        raise PathStoreError(f"Failed to write paths to file {destination}") from e


def print_paths(paths: Iterable[Union[str, Path]], stream: Optional[IO[str]] = None) -> None:
    """Print ``paths`` one per line, to stdout unless ``stream`` is given.

    Raises:
        PathStoreError: If a path is not valid UTF-8.
    """
    for path in paths:
        click.echo(_to_text(path), file=stream)


def load(
    source: Iterable[str],
    git_binary: str = "git",
    console: Optional[Console] = None,
) -> RepositoryCollection:
    """Build a collection from lines of repository paths.

    Blank lines are ignored and paths that hold no repository are dropped.

    Args:
        source: Lines to read, e.g. an open file or stdin.
        git_binary: Git executable the repositories will use.
        console: Console the repositories print to.

    Raises:
        PathStoreError: If reading ``source`` fails.
    """
    repositories = RepositoryCollection(console=console)
    try:
        for line in source:
            path = line.strip()
            if not path:
                continue
            logger.debug("Adding path %s to repositories", path)
            repo = GitRepository.open(path, git_binary=git_binary, console=console)
            if repo is not None:
                repositories.append(repo)
    except (OSError, UnicodeDecodeError) as e:
        raise PathStoreError("Failed to read repository paths") from e

    logger.info("Loaded %s repositories", len(repositories))
    return repositories


def load_file(
    path: Union[str, Path],
    git_binary: str = "git",
    console: Optional[Console] = None,
) -> RepositoryCollection:
    """Build a collection from a file written by ``persist``.

    Raises:
        PathStoreError: If the file cannot be opened or read.
    """
    logger.info("Reading repository paths from file: %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return load(f, git_binary=git_binary, console=console)
    except PathStoreError as e:
        raise PathStoreError(f"Failed to read repository paths from file {path}") from e
    except OSError as e:
        raise PathStoreError(f"Failed to open file: {path}") from e
