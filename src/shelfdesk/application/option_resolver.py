"""
Option list resolution for selection controls.

Turns the active option source (static list, filtered static list or dynamic
search results) plus the current selection into the list actually shown.
"""

from enum import Enum
from typing import Optional, Sequence

from shelfdesk.config import DEFAULT_DYNAMIC_LIMIT
from shelfdesk.domain.option import Option


class SelectMode(str, Enum):
    """Where a select takes its options from."""

    STATIC = "static"  # host options, no search box
    FILTERED = "filtered"  # host options filtered by the search text
    DYNAMIC = "dynamic"  # search provider results

    @classmethod
    def from_flags(cls, searchable: bool = False, dynamic_search: bool = False) -> "SelectMode":
        if dynamic_search:
            return cls.DYNAMIC
        return cls.FILTERED if searchable else cls.STATIC


def filter_options(options: Sequence[Option], search_text: str) -> list[Option]:
    """Keep options whose label contains ``search_text``, ignoring case.

    No search text keeps everything. Order is preserved and there is no limit.
    """
    if not search_text:
        return list(options)
    needle = search_text.lower()
    return [option for option in options if needle in option.label.lower()]


def pin_selected(
    results: Sequence[Option],
    selected: Optional[Option],
    limit: int = DEFAULT_DYNAMIC_LIMIT,
) -> list[Option]:
    """
    Take the first ``limit`` results and make sure ``selected`` is among them.

    When the selected option is missing from the slice it is prepended and the
    slice is cut to ``limit - 1`` entries, so the total never exceeds
    ``limit`` and the selected option is never the one dropped.

    Example:
        ```python
        pin_selected([a, b, c], selected=d)  # -> [d, a, b]
        pin_selected([a, b, c], selected=b)  # -> [a, b, c]
        ```
    """
    top = list(results[:limit])
    if selected is None or any(option.value == selected.value for option in top):
        return top
    return [selected, *top[: limit - 1]]


def resolve_options(
    mode: SelectMode,
    options: Sequence[Option],
    search_text: str = "",
    dynamic_results: Sequence[Option] = (),
    selected: Optional[Option] = None,
    limit: int = DEFAULT_DYNAMIC_LIMIT,
) -> list[Option]:
    """
    Compute the display-ready option list.

    Args:
        mode: Active option source
        options: Host-supplied options (ignored in dynamic mode)
        search_text: Text typed in the search box
        dynamic_results: Latest accepted provider result
        selected: Currently selected option, pinned in dynamic mode
        limit: Maximum list length in dynamic mode

    Returns:
        The list to render; empty means "show the empty state"
    """
    if mode is SelectMode.DYNAMIC:
        return pin_selected(dynamic_results, selected, limit)
    if mode is SelectMode.FILTERED:
        return filter_options(options, search_text)
    return list(options)
