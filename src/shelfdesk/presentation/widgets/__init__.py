"""Textual widgets of the admin console."""

from .admin_footer import AdminFooter
from .confirm_modal import ConfirmModal
from .empty_state import EmptyState
from .pagination import ELLIPSIS, Pagination, visible_pages
from .searchable_select import OptionItem, SearchableSelect
from .status_badge import StatusBadge, badge_style
from .user_avatar import UserAvatar

__all__ = [
    "AdminFooter",
    "ConfirmModal",
    "EmptyState",
    "ELLIPSIS",
    "Pagination",
    "visible_pages",
    "OptionItem",
    "SearchableSelect",
    "StatusBadge",
    "badge_style",
    "UserAvatar",
]
