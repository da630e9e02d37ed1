"""
Selection-control logic, independent of any widget toolkit.

- SearchScheduler debounces query text into provider lookups
- resolve_options computes the bounded list shown to the user
- SelectController tracks open/closed state and the selected option
"""

from .option_resolver import SelectMode, filter_options, pin_selected, resolve_options
from .search_scheduler import SearchScheduler, SearchTicket
from .selection import CloseReason, SelectController, SelectionState, SelectPhase
from .subscription import OutsideInteractionMonitor, ScopedSubscription, SubscriptionSource

__all__ = [
    "SelectMode",
    "filter_options",
    "pin_selected",
    "resolve_options",
    "SearchScheduler",
    "SearchTicket",
    "CloseReason",
    "SelectController",
    "SelectionState",
    "SelectPhase",
    "OutsideInteractionMonitor",
    "ScopedSubscription",
    "SubscriptionSource",
]
