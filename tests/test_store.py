"""Tests for saving and loading repository paths."""

import io
import os
from pathlib import Path
from typing import Callable, Iterator, List

import pytest
from rich.console import Console

from githerd.core.errors import PathStoreError
from githerd.core.store import load, load_file, persist, print_paths


@pytest.fixture
def mixed_paths(tmp_path: Path, make_repo: Callable[..., Path]) -> List[Path]:
    """Return two repositories with a plain directory between them."""
    plain = tmp_path / "plain"
    plain.mkdir()
    return [make_repo(tmp_path / "repo1"), plain, make_repo(tmp_path / "repo2")]


def test_persist(tmp_path: Path) -> None:
    """Test the saved file format."""
    target = tmp_path / "paths"

    persist([Path("/some"), "/random", Path("relative/vector")], target)

    assert target.read_bytes() == b"/some\n/random\nrelative/vector\n"


def test_persist_creates_parent_directories(tmp_path: Path) -> None:
    """Test saving into a directory that does not exist yet."""
    target = tmp_path / "new" / "dir" / "paths"
    persist([Path("/some")], target)
    assert target.read_text() == "/some\n"


def test_persist_overwrites(tmp_path: Path) -> None:
    """Test that saving replaces earlier results."""
    target = tmp_path / "paths"
    persist(["/old", "/older"], target)
    persist(["/new"], target)
    assert target.read_text() == "/new\n"


def test_persist_failure(tmp_path: Path) -> None:
    """Test that a file that cannot be written raises PathStoreError."""
    with pytest.raises(PathStoreError, match="Failed to write paths"):
        persist(["/some"], tmp_path)


def test_print_paths() -> None:
    """Test printing paths one per line."""
    stream = io.StringIO()
    print_paths([Path("/a"), Path("b/c")], stream)
    assert stream.getvalue() == "/a\nb/c\n"


@pytest.mark.skipif(os.name != "posix", reason="needs byte file names")
def test_persist_path_not_utf8(tmp_path: Path) -> None:
    """Test that a path with non UTF-8 bytes fails without touching the file."""
    target = tmp_path / "paths"
    target.write_text("/old\n")
    bad = Path(os.fsdecode(b"/work/caf\xe9"))

    with pytest.raises(PathStoreError, match="Path is not valid UTF-8: /work/caf"):
        persist([Path("/good"), bad], target)

    assert target.read_text() == "/old\n"


@pytest.mark.skipif(os.name != "posix", reason="needs byte file names")
def test_print_paths_not_utf8() -> None:
    """Test that printing a path with non UTF-8 bytes raises PathStoreError."""
    stream = io.StringIO()
    with pytest.raises(PathStoreError, match="Path is not valid UTF-8"):
        print_paths([Path("/a"), Path(os.fsdecode(b"/caf\xe9"))], stream)
    assert stream.getvalue() == "/a\n"


def test_round_trip(tmp_path: Path, mixed_paths: List[Path], console: Console) -> None:
    """Test that loading saved paths keeps repositories in order."""
    target = tmp_path / "paths"
    persist(mixed_paths, target)

    repositories = load_file(target, console=console)

    assert [repo.path for repo in repositories] == [mixed_paths[0], mixed_paths[2]]
    assert all(repo.console is console for repo in repositories)
    assert repositories.console is console


def test_load_skips_blank_lines(mixed_paths: List[Path]) -> None:
    """Test that blank and whitespace lines are ignored."""
    lines = ["\n", f"{mixed_paths[0]}\n", "   \n", f"{mixed_paths[2]}  \n", "\n"]
    repositories = load(lines)
    assert [repo.path for repo in repositories] == [mixed_paths[0], mixed_paths[2]]


def test_load_empty() -> None:
    """Test that empty input gives an empty collection."""
    assert len(load(io.StringIO(""))) == 0


def test_load_keeps_duplicates(mixed_paths: List[Path]) -> None:
    """Test that a repository listed twice is loaded twice."""
    source = io.StringIO(f"{mixed_paths[0]}\n{mixed_paths[0]}\n")
    assert len(load(source)) == 2


def test_load_relative_paths(
    tmp_path: Path, mixed_paths: List[Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that relative paths are resolved against the working directory."""
    monkeypatch.chdir(tmp_path)
    repositories = load(io.StringIO("repo1\nplain\nrepo2\n"))
    assert [repo.path for repo in repositories] == [Path("repo1"), Path("repo2")]


def test_load_read_error(mixed_paths: List[Path]) -> None:
    """Test that a read error discards everything read so far."""

    def broken_source() -> Iterator[str]:
        yield f"{mixed_paths[0]}\n"
        raise OSError("Input/output error")

    with pytest.raises(PathStoreError, match="Input/output error"):
        load(broken_source())


def test_load_file_missing(tmp_path: Path) -> None:
    """Test that a missing file raises PathStoreError."""
    with pytest.raises(PathStoreError, match="Failed to open file"):
        load_file(tmp_path / "missing")


def test_load_file_not_utf8(tmp_path: Path) -> None:
    """Test that undecodable content raises PathStoreError."""
    target = tmp_path / "paths"
    target.write_bytes(b"/some\n\xff\xfe\n")
    with pytest.raises(PathStoreError, match="Failed to read repository paths from file"):
        load_file(target)
