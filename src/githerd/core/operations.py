"""Operations shared by a single repository and a collection of them."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence


class RepositoryOperations(ABC):
    """Interface for the operations githerd can run on repositories.

    Both ``GitRepository`` and ``RepositoryCollection`` implement it, so a
    collection can be used anywhere a single repository can. Methods that
    print follow one pattern: capture output, decide whether anything is
    worth showing, then print banner and body in a single write.
    """

    @abstractmethod
    def run_command(self, args: Sequence[str]) -> Any:
        """Run a git command with output passed straight to the terminal.

        Args:
            args: Arguments for git, e.g. ``["status", "--short"]``.
        """

    @abstractmethod
    def status_summary(self) -> Any:
        """Show ``git status --porcelain`` output for modified repositories only."""

    @abstractmethod
    def find_history_marker(self, marker: str) -> Any:
        """Look for ``marker`` in the reflog."""

    @abstractmethod
    def print_matching_history_lines(self, marker: str) -> Any:
        """Print reflog lines containing ``marker``."""

    @abstractmethod
    def recent_commits_by_author(self, count: int, author: Optional[str]) -> Any:
        """Print commits by ``author`` among the last ``count`` commits.

        Args:
            count: Number of most recent commits to look into.
            author: Substring to look for in each log line.
        """
