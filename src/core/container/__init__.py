"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_acl_manager

The container is organized into modules:
- infrastructure: Core services (settings, logging, database)
- acl: ACL provider and ACL services
"""

from src.core.container.acl import (
    get_acl_manager,
    get_acl_provider,
    get_acl_provisioner,
    get_permission_reconciler,
)
from src.core.container.infrastructure import get_database, get_logger

__all__ = [
    # Infrastructure
    "get_database",
    "get_logger",
    # ACL
    "get_acl_manager",
    "get_acl_provider",
    "get_acl_provisioner",
    "get_permission_reconciler",
]
