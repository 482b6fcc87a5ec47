"""Discovery pipeline entry points."""

from .runner import main, run

__all__ = ["main", "run"]
