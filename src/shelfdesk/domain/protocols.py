"""Search provider protocol."""

from typing import Awaitable, Protocol, Sequence, Union

from .option import Option

__all__ = ["SearchProvider", "SearchResult"]

SearchResult = Union[Awaitable[Sequence[Option]], Sequence[Option]]


class SearchProvider(Protocol):
    """Capability used by dynamic selects to look options up by query.

    Implementations may be slow or fail, and may be called again before a
    previous call completes. Only the latest call's result is consumed.
    """

    def __call__(self, query: str) -> SearchResult:
        """Look up options matching ``query``.

        Args:
            query: Trimmed, non-empty search text

        Returns:
            A sequence of options, or an awaitable resolving to one
        """
        ...
