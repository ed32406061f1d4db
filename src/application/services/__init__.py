"""Application services for ACL management.

Usage:
    from src.application.services import AclManager
"""

from src.application.services.acl_manager import (
    DEFAULT_ACCESS_POLICY,
    AclManager,
    DefaultAccessRule,
)
from src.application.services.acl_provisioner import AclProvisioner
from src.application.services.identity_resolver import resolve_security_identity
from src.application.services.mask_builder import MaskBuilder, build_mask
from src.application.services.permission_reconciler import PermissionReconciler

__all__ = [
    "AclManager",
    "AclProvisioner",
    "DEFAULT_ACCESS_POLICY",
    "DefaultAccessRule",
    "MaskBuilder",
    "PermissionReconciler",
    "build_mask",
    "resolve_security_identity",
]
