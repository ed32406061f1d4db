"""Database models for ACL storage.

Usage:
    from src.infrastructure.persistence.models import AclEntryModel, AclObjectIdentityModel
"""

from src.infrastructure.persistence.models.acl import AclEntryModel, AclObjectIdentityModel

__all__ = [
    "AclEntryModel",
    "AclObjectIdentityModel",
]
