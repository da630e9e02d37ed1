"""Conversions from backend records to options."""

from typing import Any, Mapping

from shelfdesk.domain.option import Option


def user_option(user: Mapping[str, Any]) -> Option:
    """``{"id": 7, "name": "Ada", "email": "ada@x"}`` -> ``Option("7", "Ada (ada@x)")``."""
    return Option(value=str(user["id"]), label=f"{user.get('name', '')} ({user.get('email', '')})")


def copy_option(copy: Mapping[str, Any]) -> Option:
    """Label an available book copy by title, author, ISBN and barcode."""
    label = (
        f"{copy.get('bookTitle', '')} by {copy.get('bookAuthorName', '')} "
        f"(ISBN: {copy.get('bookIsbn', '')}) - {copy.get('barcode', '')}"
    )
    return Option(value=str(copy["id"]), label=label)
