"""Test configuration."""

from __future__ import annotations

import io
import subprocess
from pathlib import Path
from typing import Callable, Optional

import pytest
from rich.console import Console

from githerd.core.repository import GitRepository


def git(repo_path: Path, *args: str) -> str:
    """Run git in ``repo_path`` and return its output."""
    result = subprocess.run(
        ["git", *args], cwd=repo_path, check=True, capture_output=True, text=True,
        errors="surrogateescape",
    )
    return result.stdout


def commit_file(
    repo_path: Path, name: str, content: str, message: str, author: Optional[str] = None
) -> None:
    """Write a file and commit it."""
    (repo_path / name).write_text(content)
    git(repo_path, "add", name)
    args = ["commit", "-m", message]
    if author:
        args.append(f"--author={author}")
    git(repo_path, *args)


@pytest.fixture
def make_repo() -> Callable[..., Path]:
    """Return a factory creating git repositories.

    The factory takes the repository path and an optional ``commit`` flag
    controlling whether an initial commit is made.
    """

    def _make_repo(path: Path, commit: bool = False) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        git(path, "init")
        git(path, "config", "user.name", "Test User")
        git(path, "config", "user.email", "test@example.com")
        git(path, "config", "commit.gpgsign", "false")
        if commit:
            commit_file(path, "test.txt", "test content", "Initial commit")
        return path

    return _make_repo


@pytest.fixture
def temp_git_repo(tmp_path: Path, make_repo: Callable[..., Path]) -> Path:
    """Create a temporary Git repository with one commit."""
    return make_repo(tmp_path / "git_repo", commit=True)


@pytest.fixture
def console() -> Console:
    """Return a console writing to memory, without colors or wrapping."""
    return Console(file=io.StringIO(), color_system=None, width=200)


def output_of(console: Console) -> str:
    """Return everything printed to a memory console."""
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def repo(temp_git_repo: Path, console: Console) -> GitRepository:
    """Create a GitRepository for the temporary repository."""
    return GitRepository(temp_git_repo, console=console)
