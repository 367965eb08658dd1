"""Exceptions raised while loading genre graph data."""

from __future__ import annotations


class GenreGraphError(Exception):
    """Base class for genregraph errors."""


class DatasetError(GenreGraphError):
    """A dataset document is missing a field or has a field of the wrong type.

    Attributes:
        path: Location of the offending value, e.g. ``links[3].ty``
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class FetchError(GenreGraphError):
    """The dataset document could not be read from its source."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to fetch {source}: {reason}")
