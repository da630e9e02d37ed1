"""Domain types shared across the application and presentation layers."""

from .errors import ConfigurationError, SearchProviderError, ShelfdeskError
from .option import Option, find_option
from .protocols import SearchProvider, SearchResult

__all__ = [
    "Option",
    "find_option",
    "SearchProvider",
    "SearchResult",
    "ShelfdeskError",
    "ConfigurationError",
    "SearchProviderError",
]
