"""Sample records for running the console without a backend."""

from .mappers import copy_option, user_option
from .memory import InMemorySearchProvider

SAMPLE_USERS = [
    {"id": 1, "name": "Ada Lovelace", "email": "ada@example.org", "role": "ADMIN", "status": "ACTIVE"},
    {"id": 2, "name": "Alan Turing", "email": "alan@example.org", "role": "LIBRARIAN", "status": "ACTIVE"},
    {"id": 3, "name": "Grace Hopper", "email": "grace@example.org", "role": "MEMBER", "status": "ACTIVE"},
    {"id": 4, "name": "Edsger Dijkstra", "email": "edsger@example.org", "role": "MEMBER", "status": "SUSPENDED"},
    {"id": 5, "name": "Barbara Liskov", "email": "barbara@example.org", "role": "MEMBER", "status": "PENDING"},
    {"id": 6, "name": "Donald Knuth", "email": "don@example.org", "role": "MEMBER", "status": "INACTIVE"},
    {"id": 7, "name": "Margaret Hamilton", "email": "margaret@example.org", "role": "LIBRARIAN", "status": "ACTIVE"},
]

SAMPLE_COPIES = [
    {"id": 11, "bookTitle": "Dune", "bookAuthorName": "Frank Herbert", "bookIsbn": "9780441013593", "barcode": "BC-0011"},
    {"id": 12, "bookTitle": "Dune Messiah", "bookAuthorName": "Frank Herbert", "bookIsbn": "9780593098233", "barcode": "BC-0012"},
    {"id": 13, "bookTitle": "Neuromancer", "bookAuthorName": "William Gibson", "bookIsbn": "9780441569595", "barcode": "BC-0013"},
    {"id": 14, "bookTitle": "The Left Hand of Darkness", "bookAuthorName": "Ursula K. Le Guin", "bookIsbn": "9780441478125", "barcode": "BC-0014"},
    {"id": 15, "bookTitle": "Foundation", "bookAuthorName": "Isaac Asimov", "bookIsbn": "9780553293357", "barcode": "BC-0015"},
]


def sample_user_provider(latency: float = 0.2) -> InMemorySearchProvider:
    return InMemorySearchProvider(SAMPLE_USERS, user_option, fields=("name", "email"), latency=latency)


def sample_copy_provider(latency: float = 0.2) -> InMemorySearchProvider:
    return InMemorySearchProvider(
        SAMPLE_COPIES,
        copy_option,
        fields=("bookTitle", "bookAuthorName", "bookIsbn", "barcode"),
        latency=latency,
    )
