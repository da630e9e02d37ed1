"""Configuration for selection controls and the admin console."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from shelfdesk.domain.errors import ConfigurationError

DEFAULT_DEBOUNCE_DELAY = 0.3
DEFAULT_DYNAMIC_LIMIT = 3


@dataclass(frozen=True)
class SelectConfig:
    """Behaviour and texts of a searchable select."""

    # Timing
    debounce_delay: float = DEFAULT_DEBOUNCE_DELAY  # seconds of quiet input before a lookup

    # Dynamic mode shows at most this many options (selected option included)
    dynamic_limit: int = DEFAULT_DYNAMIC_LIMIT

    # Texts
    placeholder: str = "Select option"
    search_placeholder: str = "Search..."
    searching_text: str = "Searching..."
    no_results_text: str = "No options found"
    no_options_text: str = "No options available"

    def __post_init__(self) -> None:
        if self.debounce_delay < 0:
            raise ConfigurationError(f"debounce_delay must be >= 0, got {self.debounce_delay}")
        if self.dynamic_limit < 1:
            raise ConfigurationError(f"dynamic_limit must be >= 1, got {self.dynamic_limit}")


@dataclass(frozen=True)
class AppSettings:
    """Settings of the admin console, usually read from the environment (.env)."""

    api_url: str = "http://localhost:8080"
    api_token: str = ""
    search_size: int = DEFAULT_DYNAMIC_LIMIT
    debounce_ms: int = int(DEFAULT_DEBOUNCE_DELAY * 1000)
    timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """Load settings from ``SHELFDESK_*`` environment variables.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        env = os.environ if env is None else env
        return cls(
            api_url=env.get("SHELFDESK_API_URL", cls.api_url).rstrip("/"),
            api_token=env.get("SHELFDESK_API_TOKEN", cls.api_token),
            search_size=_parse_number(env, "SHELFDESK_SEARCH_SIZE", cls.search_size, int),
            debounce_ms=_parse_number(env, "SHELFDESK_DEBOUNCE_MS", cls.debounce_ms, int),
            timeout=_parse_number(env, "SHELFDESK_TIMEOUT", cls.timeout, float),
            log_level=env.get("SHELFDESK_LOG_LEVEL", cls.log_level).upper(),
        )

    def with_overrides(self, **changes) -> "AppSettings":
        """Return a copy with CLI overrides applied (None values are ignored)."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def select_config(self, **overrides) -> SelectConfig:
        """Build the SelectConfig used by the console's selects."""
        return SelectConfig(debounce_delay=self.debounce_ms / 1000, **overrides)


def _parse_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
