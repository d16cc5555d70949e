"""Repository functionality for githerd."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from rich.console import Console
from rich.text import Text

from .errors import ExecError
from .operations import RepositoryOperations

logger = logging.getLogger(__name__)

default_console = Console()

BANNER_STYLE = "bold blue on grey11"

LOG_FORMAT = "%h -%d %s (%cr) <%an>"


def _is_git_dir(path: Path) -> bool:
    """Check whether ``path`` is laid out like a git directory."""
    if not (path / "HEAD").is_file():
        return False
    common = path
    commondir = path / "commondir"
    if commondir.is_file():
        # Linked worktrees keep objects and refs in the main git directory
        common = path / commondir.read_text(encoding="utf-8").strip()
    return (common / "objects").is_dir() and (common / "refs").is_dir()


def _read_gitfile(path: Path) -> Optional[Path]:
    """Return the directory a ``.git`` file points to."""
    content = path.read_text(encoding="utf-8").strip()
    if not content.startswith("gitdir:"):
        return None
    target = Path(content[len("gitdir:") :].strip())
    if not target.is_absolute():
        target = path.parent / target
    return target


def is_repository_root(path: Union[str, Path]) -> bool:
    """Check if ``path`` is the root of a git repository.

    Accepts working trees with a ``.git`` directory or gitfile, and bare
    repositories. Subdirectories of a working tree are not roots. Never
    raises; unreadable paths are simply not repositories.
    """
    path = Path(path)
    try:
        if not path.is_dir():
            return False
        dot_git = path / ".git"
        if dot_git.is_dir():
            return _is_git_dir(dot_git)
        if dot_git.is_file():
            target = _read_gitfile(dot_git)
            return target is not None and _is_git_dir(target)
        return _is_git_dir(path)
    except (OSError, UnicodeDecodeError):
        return False


class GitRepository(RepositoryOperations):
    """Represents a single git repository githerd works on.

    Every operation runs git with the repository as working directory.
    A git process that cannot be started raises ``ExecError``; a git process
    that exits with a non-zero status is only logged.

    Attributes:
        path (Path): Path to the repository, exactly as it was given.
    """

    def __init__(
        self,
        path: Union[str, Path],
        git_binary: str = "git",
        console: Optional[Console] = None,
    ) -> None:
        """Initialize repository."""
        self.path = Path(path)
        self.git_binary = git_binary
        self.console = console if console is not None else default_console

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        git_binary: str = "git",
        console: Optional[Console] = None,
    ) -> Optional[GitRepository]:
        """Create a repository for ``path`` if it is a repository root.

        Returns:
            The repository, or None when ``path`` holds no repository.

        Example:
            ```python
            repo = GitRepository.open("/path/to/repo")
            if repo is not None:
                repo.status_summary()
            ```
        """
        if not is_repository_root(path):
            logger.warning("Did not find git repository in provided path: %s", path)
            return None
        logger.debug("Create repository for path: %s", path)
        return cls(path, git_binary=git_binary, console=console)

    def __str__(self) -> str:
        """Return string representation."""
        return f"GitRepository({self.path})"

    def __repr__(self) -> str:
        """Return string representation."""
        return self.__str__()

    def _run_git(self, args: Sequence[str], capture: bool = True) -> subprocess.CompletedProcess:
        """Run git in the repository.

        Raises:
            ExecError: If git could not be started.
        """
        command = " ".join([self.git_binary, *args])
        logger.debug("Executing %s in %s", command, self.path)
        try:
            if capture:
                return subprocess.run(
                    [self.git_binary, *args],
                    cwd=self.path,
                    capture_output=True,
                    text=True,
                    errors="replace",
                )
            return subprocess.run([self.git_binary, *args], cwd=self.path)
        except OSError as e:
            raise ExecError(f"Failed to execute: {command} in {self.path}", command, self.path) from e

    def _capture(self, *args: str) -> str:
        """Run git, returning its stdout whatever the exit status."""
        result = self._run_git(args)
        if result.returncode != 0:
            logger.debug(
                "git %s exited with status %s in %s: %s",
                " ".join(args),
                result.returncode,
                self.path,
                result.stderr.strip(),
            )
        return result.stdout

    def banner(self) -> Text:
        """Return the header identifying this repository in output."""
        return Text(str(self.path), style=BANNER_STYLE)

    def print_banner(self) -> None:
        """Print the banner on its own."""
        self.console.print(self.banner(), soft_wrap=True, highlight=False)

    def _print_with_banner(self, lines: Sequence[str]) -> None:
        """Print the banner followed by ``lines`` in a single write."""
        text = self.banner()
        for line in lines:
            text.append("\n")
            text.append(line)
        self.console.print(text, soft_wrap=True, highlight=False)

    def run_command(self, args: Sequence[str]) -> int:
        """Run a git command with output going straight to the terminal.

        Args:
            args: Arguments for git.

        Returns:
            int: Exit status of git.

        Raises:
            ExecError: If git could not be started.
        """
        self.print_banner()
        result = self._run_git(args, capture=False)
        if result.returncode != 0:
            logger.warning(
                "git %s exited with status %s in %s",
                " ".join(args),
                result.returncode,
                self.path,
            )
        return result.returncode

    def status_summary(self) -> Optional[str]:
        """Print ``git status --porcelain`` output if the repository is modified.

        Nothing at all is printed for a clean repository.

        Returns:
            Optional[str]: The status output, or None when clean.
        """
        output = self._capture("status", "--porcelain")
        if not output.strip():
            return None
        self._print_with_banner(output.rstrip("\n").split("\n"))
        return output

    def find_history_marker(self, marker: str) -> Optional[str]:
        """Return the reflog if ``marker`` appears anywhere in it."""
        output = self._capture("reflog")
        if marker in output:
            return output
        return None

    def print_matching_history_lines(self, marker: str) -> List[str]:
        """Print the reflog lines containing ``marker``, if any."""
        output = self._capture("reflog")
        matches = [line for line in output.splitlines() if marker in line]
        if matches:
            self._print_with_banner(matches)
        return matches

    def current_user_name(self) -> Optional[str]:
        """Return ``user.name`` as configured for this repository."""
        name = self._capture("config", "user.name").strip()
        return name or None

    def recent_commits_by_author(self, count: int, author: Optional[str]) -> List[str]:
        """Print commits by ``author`` among the last ``count`` commits.

        Args:
            count: Number of most recent commits to look into.
            author: Substring to look for in each log line. When None the
                repository's configured user name is used.

        Returns:
            List[str]: Matching log lines, newest first.
        """
        if author is None:
            author = self.current_user_name()
            if author is None:
                logger.warning("No user.name configured for %s, skipping", self.path)
                return []

        output = self._capture(
            "log", "--graph", "-n", str(count), f"--pretty=format:{LOG_FORMAT}"
        )
        matches = [line for line in output.splitlines() if author in line]
        if matches:
            self._print_with_banner(matches)
        return matches
