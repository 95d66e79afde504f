"""Exception hierarchy for genealogytree."""

from typing import Any, Optional


class GenealogyTreeError(Exception):
    """Base class for all errors raised by genealogytree."""


class FetchFailure(GenealogyTreeError):
    """A tree fetch failed at the network or backend level.

    Navigation state is never rolled back when this is raised; the
    session shows an error for the new root and offers a retry.

    Attributes:
        key: FetchKey that was being fetched
        cause: Underlying exception, if any
    """

    def __init__(self, key: Any, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.key = key
        self.cause = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.key is None:
            return base
        return f"{base} (key={self.key})"


class MalformedPayload(FetchFailure):
    """The backend answered, but not with the expected envelope."""
