"""In-process search provider used for offline mode and tests."""

import asyncio
from typing import Any, Callable, Iterable, Mapping, Sequence

from shelfdesk.domain.option import Option
from shelfdesk.logger import get_logger

logger = get_logger("search.memory")


class InMemorySearchProvider:
    """Case-insensitive substring search over a list of records.

    Args:
        records: Backend-shaped records (dicts)
        to_option: Converts a matching record into an Option
        fields: Record keys searched for the query
        size: Maximum number of results, like the backend's ``size`` parameter
        latency: Artificial delay in seconds before answering
    """

    def __init__(
        self,
        records: Iterable[Mapping[str, Any]],
        to_option: Callable[[Mapping[str, Any]], Option],
        fields: Sequence[str],
        size: int = 3,
        latency: float = 0.0,
    ):
        self.records = list(records)
        self.to_option = to_option
        self.fields = tuple(fields)
        self.size = size
        self.latency = latency
        self.calls: list[str] = []

    async def __call__(self, query: str) -> list[Option]:
        self.calls.append(query)
        if self.latency > 0:
            await asyncio.sleep(self.latency)

        needle = query.strip().lower()
        matches = [
            record
            for record in self.records
            if any(needle in str(record.get(field, "")).lower() for field in self.fields)
        ]
        logger.debug(f"In-memory search {query!r}: {len(matches)} match(es)")
        return [self.to_option(record) for record in matches[: self.size]]
