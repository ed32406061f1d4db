"""Domain value objects.

Immutable values compared by content, never by identity.
"""

from src.domain.value_objects.object_identity import ObjectIdentity
from src.domain.value_objects.role import Role
from src.domain.value_objects.security_identity import SecurityIdentity

__all__ = [
    "ObjectIdentity",
    "Role",
    "SecurityIdentity",
]
