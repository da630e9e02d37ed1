"""Search providers for dynamic selects."""

from .http import (
    AVAILABLE_COPIES_SEARCH_PATH,
    USERS_SEARCH_PATH,
    HttpSearchProvider,
    available_copy_search_provider,
    user_search_provider,
)
from .mappers import copy_option, user_option
from .memory import InMemorySearchProvider
from .sample_data import SAMPLE_COPIES, SAMPLE_USERS, sample_copy_provider, sample_user_provider

__all__ = [
    "HttpSearchProvider",
    "InMemorySearchProvider",
    "user_search_provider",
    "available_copy_search_provider",
    "user_option",
    "copy_option",
    "USERS_SEARCH_PATH",
    "AVAILABLE_COPIES_SEARCH_PATH",
    "SAMPLE_USERS",
    "SAMPLE_COPIES",
    "sample_user_provider",
    "sample_copy_provider",
]
