"""Core functionality for githerd."""

from .collection import RepositoryCollection
from .config import Config
from .discovery import discover
from .repository import GitRepository

__all__ = ["Config", "GitRepository", "RepositoryCollection", "discover"]
