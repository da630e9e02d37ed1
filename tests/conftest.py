"""Shared fixtures and fakes for shelfdesk tests."""

import asyncio
from typing import Optional

import pytest

from shelfdesk.config import SelectConfig
from shelfdesk.domain.option import Option

FAST_DELAY = 0.01
SETTLE = 0.05


class GatedProvider:
    """Search provider whose answers are released by the test.

    Each query waits on its own asyncio.Event, so tests decide the order in
    which responses arrive.
    """

    def __init__(self, responses: Optional[dict[str, list[Option]]] = None):
        self.responses = responses or {}
        self.calls: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    def gate(self, query: str) -> asyncio.Event:
        return self._gates.setdefault(query, asyncio.Event())

    def release(self, query: str) -> None:
        self.gate(query).set()

    async def __call__(self, query: str) -> list[Option]:
        self.calls.append(query)
        await self.gate(query).wait()
        return self.responses.get(query, [])


class StaticProvider:
    """Search provider answering immediately with fixed results."""

    def __init__(self, results: list[Option]):
        self.results = results
        self.calls: list[str] = []

    async def __call__(self, query: str) -> list[Option]:
        self.calls.append(query)
        return list(self.results)


class FailingProvider:
    def __init__(self, error: Exception):
        self.error = error
        self.calls: list[str] = []

    async def __call__(self, query: str) -> list[Option]:
        self.calls.append(query)
        raise self.error


async def settle(delay: float = SETTLE) -> None:
    """Let debounce timers fire and lookups finish."""
    await asyncio.sleep(delay)


@pytest.fixture
def fast_config() -> SelectConfig:
    return SelectConfig(debounce_delay=FAST_DELAY)


@pytest.fixture
def phonetic() -> list[Option]:
    return [
        Option("A", "Alpha"),
        Option("B", "Bravo"),
        Option("C", "Charlie"),
        Option("D", "Delta"),
    ]
