"""ACL provider adapters.

- InMemoryAclProvider: dict-backed provider (tests, single process)

The relational provider lives with the other persistence adapters in
src.infrastructure.persistence.repositories.
"""

from src.infrastructure.acl.in_memory_provider import InMemoryAclProvider

__all__ = ["InMemoryAclProvider"]
