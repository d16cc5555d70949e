"""Batch operations over many repositories."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from .operations import RepositoryOperations
from .repository import GitRepository, default_console

logger = logging.getLogger(__name__)

TITLE_STYLE = "bold magenta"


class RepositoryCollection(RepositoryOperations):
    """All repositories githerd is working on.

    Each batch prints one title, then runs the operation on every repository
    in order, one at a time. An ``ExecError`` from any repository stops the
    batch there; output printed so far stays on screen.
    """

    def __init__(
        self,
        repositories: Optional[Iterable[GitRepository]] = None,
        console: Optional[Console] = None,
    ) -> None:
        """Initialize collection."""
        self.repositories: List[GitRepository] = list(repositories or [])
        self.console = console if console is not None else default_console

    def __len__(self) -> int:
        return len(self.repositories)

    def __iter__(self) -> Iterator[GitRepository]:
        return iter(self.repositories)

    def append(self, repository: GitRepository) -> None:
        """Add a repository. Duplicates are kept."""
        self.repositories.append(repository)

    def print_title(self, title: str) -> None:
        """Print the banner heading a batch."""
        self.console.print(Text(f"==> {title}", style=TITLE_STYLE), soft_wrap=True, highlight=False)

    def run_command(self, args: Sequence[str]) -> List[int]:
        """Run a git command on all repositories."""
        command = " ".join(args)
        logger.debug("Executing command: %s on all repositories", command)
        self.print_title(f"git {command}")
        return [repo.run_command(args) for repo in self.repositories]

    def status_summary(self) -> List[Optional[str]]:
        """Show status of modified repositories."""
        self.print_title("Modified repositories")
        return [repo.status_summary() for repo in self.repositories]

    def find_history_marker(self, marker: str) -> List[GitRepository]:
        """Print every repository whose reflog mentions ``marker``.

        Returns:
            List[GitRepository]: Repositories with a match.
        """
        self.print_title(f"Repositories with '{marker}' in reflog")
        found = []
        for repo in self.repositories:
            if repo.find_history_marker(marker) is not None:
                repo.print_banner()
                found.append(repo)
        return found

    def print_matching_history_lines(self, marker: str) -> List[List[str]]:
        """Print reflog lines mentioning ``marker`` for all repositories."""
        self.print_title(f"Reflog entries with '{marker}'")
        return [repo.print_matching_history_lines(marker) for repo in self.repositories]

    def recent_commits_by_author(self, count: int, author: Optional[str]) -> List[List[str]]:
        """Print commits by ``author`` in the last ``count`` commits of each repository."""
        who = author if author is not None else "current user"
        self.print_title(f"Commits by {who} in last {count} commits")
        return [repo.recent_commits_by_author(count, author) for repo in self.repositories]
