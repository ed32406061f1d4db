"""Domain enums for the ACL model.

Available Enums:
    - AceScope: Entry scope of an ACL (class or object)
    - Permission: Named permission bits combined into masks
    - SecurityIdentityKind: Principal or role identity
    - SystemRole: Built-in role names used by the default access policy
"""

from src.domain.enums.ace_scope import AceScope
from src.domain.enums.permission import Permission
from src.domain.enums.security_identity_kind import SecurityIdentityKind
from src.domain.enums.system_role import SystemRole

__all__ = [
    "AceScope",
    "Permission",
    "SecurityIdentityKind",
    "SystemRole",
]
