"""Error types for githerd."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class GitherdError(Exception):
    """Base class for all githerd errors.

    The message of a chained error includes the message of its cause, so the
    top level can report the whole context in one line.
    """

    def __str__(self) -> str:
        message = super().__str__()
        if self.__cause__ is not None:
            return f"{message}: {self.__cause__}"
        return message


class ConfigError(GitherdError):
    """Configuration file could not be read or is invalid."""


class DiscoveryError(GitherdError):
    """Directory walk failed."""


class PathStoreError(GitherdError):
    """Reading or writing repository paths failed."""


class ExecError(GitherdError):
    """Git could not be launched for a repository."""

    def __init__(
        self, message: str, command: str, path: Optional[Union[str, Path]] = None
    ) -> None:
        """Initialize error."""
        super().__init__(message)
        self.command = command
        self.path = path
