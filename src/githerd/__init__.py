"""githerd: run git across many repositories at once."""

__version__ = "0.1.0"
