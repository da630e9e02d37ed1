"""
Utility functions for the shelfdesk application.
"""

import os
from datetime import datetime


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/shelfdesk).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def initials(name: str, max_letters: int = 2) -> str:
    """
    Build the initials shown in place of a missing avatar image.

    Args:
        name: Display name (e.g. "Ada Lovelace")
        max_letters: Maximum number of letters to keep

    Returns:
        Upper-cased initials like "AL", or "?" if the name is blank
    """
    letters = [part[0] for part in name.split() if part]
    if not letters:
        return "?"
    return "".join(letters[:max_letters]).upper()


def current_year() -> int:
    """Return the current calendar year (used by the footer)."""
    return datetime.now().year
