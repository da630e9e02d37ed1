"""Exception types raised by shelfdesk components."""

from typing import Optional


class ShelfdeskError(Exception):
    """Base class for all shelfdesk errors."""


class ConfigurationError(ShelfdeskError):
    """Raised when settings are missing or malformed."""


class SearchProviderError(ShelfdeskError):
    """Raised by a search provider when a lookup cannot be completed.

    The search scheduler catches this (and any other provider exception),
    logs it and treats the lookup as an empty result.

    Attributes:
        query: The query that failed
        status_code: HTTP status code, when the failure came from a response
    """

    def __init__(self, message: str, query: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.query = query
        self.status_code = status_code
