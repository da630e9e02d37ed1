"""
SearchScheduler - debounced lookups for dynamic selection controls.

Raw query text changes are collapsed into at most one provider call per quiet
period. Every call is tagged with the query that triggered it and its result
is applied only while that query is still the current one (last query wins,
not first response wins). Provider failures are logged and treated as an
empty result.
"""

import asyncio
import inspect
from dataclasses import dataclass
from typing import Callable, Optional

from shelfdesk.config import DEFAULT_DEBOUNCE_DELAY
from shelfdesk.domain.option import Option
from shelfdesk.domain.protocols import SearchProvider
from shelfdesk.logger import get_logger

logger = get_logger("search_scheduler")

ResultsCallback = Callable[[list[Option]], None]
SearchingCallback = Callable[[bool], None]


@dataclass
class SearchTicket:
    """The latest-query tag and the pending debounce timer of one control.

    ``query`` is None when no lookup may apply its result (after close or
    disposal). ``generation`` changes every time a query is issued or the
    ticket is invalidated, so a lookup issued before a close stays stale even
    when the same text is typed again.
    """

    query: Optional[str] = None
    timer: Optional[asyncio.Task] = None
    generation: int = 0

    def issue(self, query: str) -> int:
        """Make ``query`` the current one and return its generation."""
        self.generation += 1
        self.query = query
        return self.generation

    def is_current(self, query: str, generation: Optional[int] = None) -> bool:
        if self.query is None or self.query != query:
            return False
        return generation is None or generation == self.generation

    @property
    def pending(self) -> bool:
        return self.timer is not None and not self.timer.done()

    def cancel_timer(self) -> bool:
        """Cancel the pending timer. Returns True if one was pending."""
        timer, self.timer = self.timer, None
        if timer is not None and not timer.done():
            timer.cancel()
            return True
        return False

    def invalidate(self) -> None:
        """Mark every issued lookup as stale."""
        self.generation += 1
        self.query = None


class SearchScheduler:
    """
    Debounces query text into provider lookups for a single control.

    Each scheduler owns its own ticket; nothing is shared between controls.
    Must be driven from a running asyncio event loop.
    """

    def __init__(
        self,
        provider: Optional[SearchProvider],
        on_results: ResultsCallback,
        on_searching: Optional[SearchingCallback] = None,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
    ):
        """
        Initialize the scheduler.

        Args:
            provider: Search capability; None disables lookups (results stay empty)
            on_results: Receives every accepted result (possibly empty)
            on_searching: Receives each change of the "is searching" flag
            delay: Debounce delay in seconds
        """
        self.provider = provider
        self.delay = delay
        self.ticket = SearchTicket()
        self._on_results = on_results
        self._on_searching = on_searching
        self._tasks: set[asyncio.Task] = set()
        self._searching = False
        self._disposed = False

    @property
    def is_searching(self) -> bool:
        return self._searching

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def current_query(self) -> Optional[str]:
        return self.ticket.query

    def schedule(self, text: str) -> None:
        """
        React to a change of the query text.

        The pending timer (if any) is cancelled. A non-empty trimmed query
        starts a new timer; an empty one clears the results immediately
        without calling the provider.
        """
        if self._disposed:
            logger.debug("Ignoring query change on disposed scheduler")
            return

        query = text.strip()
        self.ticket.cancel_timer()
        generation = self.ticket.issue(query)
        self._set_searching(False)

        if not query or self.provider is None:
            self._on_results([])
            return

        task = asyncio.create_task(self._debounce_and_search(query, generation))
        self.ticket.timer = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel(self) -> None:
        """Cancel the pending timer and stale any in-flight lookup."""
        if self.ticket.cancel_timer():
            logger.debug("Cancelled pending debounce timer")
        self.ticket.invalidate()
        self._set_searching(False)

    def dispose(self) -> None:
        """Release the scheduler for good; later query changes are ignored."""
        if self._disposed:
            return
        self.cancel()
        self._disposed = True
        for task in list(self._tasks):
            if not task.done():
                task.cancel()
        self._tasks.clear()
        logger.debug("Search scheduler disposed")

    async def _debounce_and_search(self, query: str, generation: int) -> None:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            logger.debug(f"Debounce timer for {query!r} cancelled")
            raise

        if self.ticket.timer is asyncio.current_task():
            self.ticket.timer = None
        if not self.ticket.is_current(query, generation):
            return

        self._set_searching(True)
        logger.debug(f"Searching for {query!r}")
        results = await self._lookup(query)

        if not self.ticket.is_current(query, generation):
            logger.debug(f"Discarding stale results for {query!r} (current={self.ticket.query!r})")
            return

        self._set_searching(False)
        logger.debug(f"Applying {len(results)} result(s) for {query!r}")
        self._on_results(results)

    async def _lookup(self, query: str) -> list[Option]:
        try:
            result = self.provider(query)
            if inspect.isawaitable(result):
                result = await result
            return list(result or [])
        except Exception as e:
            logger.warning(f"Search error for {query!r}: {e}")
            return []

    def _set_searching(self, searching: bool) -> None:
        if self._searching == searching:
            return
        self._searching = searching
        if self._on_searching:
            self._on_searching(searching)
