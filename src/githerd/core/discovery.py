"""Repository discovery: find git repositories below a directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .errors import DiscoveryError
from .repository import is_repository_root

logger = logging.getLogger(__name__)

SKIP_NAMES = (".git",)


def iter_directories(
    root: Path,
    min_depth: int,
    max_depth: int,
    skip: Iterable[str] = SKIP_NAMES,
) -> Iterator[Path]:
    """Yield directories below ``root`` whose depth is within bounds.

    ``root`` itself has depth 0. Directories shallower than ``min_depth`` are
    walked through but not yielded. Siblings come in name order. Symlinks
    to directories are yielded like directories but never descended into.

    Raises:
        DiscoveryError: If a directory cannot be listed.
    """
    skip = frozenset(skip)

    def _walk(path: Path, depth: int) -> Iterator[Path]:
        if depth >= min_depth:
            yield path
        if depth >= max_depth:
            return
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise DiscoveryError(f"Failed to read directory {path}") from e

        for entry in entries:
            if entry.name in skip:
                continue
            try:
                is_link = entry.is_symlink()
                is_dir = entry.is_dir()
            except OSError as e:
                raise DiscoveryError(f"Failed to inspect {entry.path}") from e
            if not is_dir:
                continue
            if is_link:
                if depth + 1 >= min_depth:
                    yield Path(entry.path)
            else:
                yield from _walk(Path(entry.path), depth + 1)

    return _walk(root, 0)


def discover(
    root: Union[str, Path],
    min_depth: int = 0,
    max_depth: int = 3,
    relative: bool = False,
    skip_names: Iterable[str] = SKIP_NAMES,
    exclude_patterns: Iterable[str] = (),
    cwd: Optional[Path] = None,
) -> List[Path]:
    """Find repository roots below ``root``.

    Args:
        root: Directory to start from.
        min_depth: Shallowest depth to report, 0 being ``root`` itself.
        max_depth: Deepest depth to visit.
        relative: Report paths relative to the current working directory.
        skip_names: Directory names never visited, git metadata by default.
        exclude_patterns: Additional directory names never visited.
        cwd: Directory relative paths are computed against, defaults to the
            process working directory.

    Returns:
        List[Path]: Repository roots in walk order.

    Raises:
        DiscoveryError: If the walk fails or a path cannot be made relative.
    """
    if min_depth < 0 or max_depth < 0:
        raise DiscoveryError("Depth must not be negative")
    if min_depth > max_depth:
        raise DiscoveryError(f"min_depth {min_depth} is greater than max_depth {max_depth}")

    root = Path(root)
    skip = set(skip_names) | set(exclude_patterns)
    if relative:
        cwd = (cwd or Path.cwd()).absolute()
        root = root.absolute()

    logger.debug("Scanning %s, min_depth=%s, max_depth=%s", root, min_depth, max_depth)

    repos: List[Path] = []
    for path in iter_directories(root, min_depth, max_depth, skip):
        if not is_repository_root(path):
            continue
        if relative:
            try:
                path = path.relative_to(cwd)
            except ValueError as e:
                raise DiscoveryError(f"Failed to create relative path for {path}") from e
        logger.debug("Found repository in %s", path)
        repos.append(path)

    logger.info(
        "Found %s repositories in %s, min_depth=%s, max_depth=%s",
        len(repos),
        root,
        min_depth,
        max_depth,
    )
    return repos
