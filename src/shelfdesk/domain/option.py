"""Option value objects shown by selection controls."""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class Option:
    """A selectable entry.

    Options are supplied by the host or returned by a search provider and are
    never mutated afterwards. ``value`` is unique within one resolved list.

    Attributes:
        value: Identifier reported back to the host on selection
        label: Human readable text
        icon: Optional decorative glyph or Rich markup rendered before the label
    """

    value: str
    label: str
    icon: Optional[str] = None


def find_option(options: Iterable[Option], value: str) -> Optional[Option]:
    """Return the first option whose value equals ``value``."""
    for option in options:
        if option.value == value:
            return option
    return None

