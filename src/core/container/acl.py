"""ACL dependency factories.

The provider is an application-scoped singleton. Services are cheap and
stateless and built per call; AclManager holds session state, so every
call returns a new manager.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.container.infrastructure import get_database, get_logger

if TYPE_CHECKING:
    from src.application.services import (
        AclManager,
        AclProvisioner,
        PermissionReconciler,
    )
    from src.domain.protocols.acl_provider_protocol import AclProviderProtocol


@lru_cache()
def get_acl_provider() -> "AclProviderProtocol":
    """Get ACL provider singleton (app-scoped).

    Backend chosen by settings.acl_backend:
        - 'memory': InMemoryAclProvider
        - 'sqlalchemy': SqlAlchemyAclProvider on settings.database_url

    Returns:
        Provider implementing AclProviderProtocol.
    """
    if settings.acl_backend == "sqlalchemy":
        from src.infrastructure.persistence.repositories import SqlAlchemyAclProvider

        return SqlAlchemyAclProvider(get_database(), get_logger())

    from src.infrastructure.acl import InMemoryAclProvider

    return InMemoryAclProvider()


def get_acl_provisioner() -> "AclProvisioner":
    """Build an AclProvisioner on the shared provider."""
    from src.application.services import AclProvisioner

    return AclProvisioner(provider=get_acl_provider(), logger=get_logger())


def get_permission_reconciler() -> "PermissionReconciler":
    """Build a PermissionReconciler on the shared provider."""
    from src.application.services import PermissionReconciler

    return PermissionReconciler(provider=get_acl_provider(), logger=get_logger())


def get_acl_manager() -> "AclManager":
    """Build a new AclManager (one per editing session).

    Returns:
        AclManager using the shared provider, the default access policy and
        settings.default_insert_index.
    """
    from src.application.services import AclManager

    return AclManager(
        provider=get_acl_provider(),
        logger=get_logger(),
        insert_index=settings.default_insert_index,
    )
