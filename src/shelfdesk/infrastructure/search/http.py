"""
HTTP search providers backed by the library-management REST API.

Both endpoints used by the issue-book form take ``query`` and ``size`` query
parameters and answer with a JSON array of records.
"""

from typing import Any, Callable, Mapping, Optional

import httpx

from shelfdesk.domain.errors import SearchProviderError
from shelfdesk.domain.option import Option
from shelfdesk.logger import get_logger

from .mappers import copy_option, user_option

logger = get_logger("search.http")

USERS_SEARCH_PATH = "/api/users/search"
AVAILABLE_COPIES_SEARCH_PATH = "/api/book-copies/search-available"


class HttpSearchProvider:
    """Search provider calling ``GET {base_url}{path}?query=..&size=..``.

    Transport errors, error statuses and undecodable bodies raise
    SearchProviderError. A JSON body that is not a list yields no options.
    """

    def __init__(
        self,
        base_url: str,
        path: str,
        to_option: Callable[[Mapping[str, Any]], Option],
        token: str = "",
        size: int = 3,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the provider.

        Args:
            base_url: API root, e.g. http://localhost:8080
            path: Endpoint path
            to_option: Converts one JSON record into an Option
            token: Bearer token; omitted from the request when empty
            size: Maximum number of results requested
            timeout: Request timeout in seconds
            client: Shared client; when None a client is created per call
        """
        self.url = f"{base_url.rstrip('/')}{path}"
        self.to_option = to_option
        self.token = token
        self.size = size
        self.timeout = timeout
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def __call__(self, query: str) -> list[Option]:
        params = {"query": query, "size": self.size}
        try:
            if self._client is not None:
                response = await self._client.get(self.url, params=params, headers=self._headers())
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            raise SearchProviderError(f"Request to {self.url} failed: {e}", query=query) from e

        if response.is_error:
            raise SearchProviderError(
                f"Search at {self.url} failed with status {response.status_code}",
                query=query,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise SearchProviderError(f"Invalid JSON from {self.url}", query=query) from e

        if not isinstance(payload, list):
            logger.warning(f"Expected a list from {self.url}, got {type(payload).__name__}")
            return []
        return [self.to_option(record) for record in payload]


def user_search_provider(
    base_url: str, token: str = "", size: int = 3, **kwargs
) -> HttpSearchProvider:
    """Users by name or email, labelled ``"{name} ({email})"``."""
    return HttpSearchProvider(base_url, USERS_SEARCH_PATH, user_option, token=token, size=size, **kwargs)


def available_copy_search_provider(
    base_url: str, token: str = "", size: int = 3, **kwargs
) -> HttpSearchProvider:
    """Book copies that can be issued, searched by title, author, ISBN or barcode."""
    return HttpSearchProvider(
        base_url, AVAILABLE_COPIES_SEARCH_PATH, copy_option, token=token, size=size, **kwargs
    )
