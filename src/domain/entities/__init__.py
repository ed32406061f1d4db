"""Domain entities.

Usage:
    from src.domain.entities import Acl, Entry
"""

from src.domain.entities.acl import Acl
from src.domain.entities.entry import Entry

__all__ = [
    "Acl",
    "Entry",
]
