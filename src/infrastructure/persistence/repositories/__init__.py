"""Repository implementations (SQLAlchemy adapters).

Usage:
    from src.infrastructure.persistence.repositories import SqlAlchemyAclProvider
"""

from src.infrastructure.persistence.repositories.acl_provider import SqlAlchemyAclProvider

__all__ = ["SqlAlchemyAclProvider"]
