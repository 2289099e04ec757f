"""
Application common module.

Base classes for the application layer:
- Command: Input for a use case that changes state
- Query: Input for a use case that only reads
- UseCase: One intent, one execute() method
- Pagination / PaginatedResult: Paging for list queries
"""

from .pagination import PaginatedResult, Pagination
from .use_case import Command, Query, UseCase

__all__ = [
    "Command",
    "PaginatedResult",
    "Pagination",
    "Query",
    "UseCase",
]
