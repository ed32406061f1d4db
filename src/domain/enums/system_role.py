"""Built-in role names.

These names are the targets of the default access policy installed on a
freshly provisioned ACL.

Role Hierarchy (by granted mask):
    ROLE_SUPER_ADMIN > ROLE_ADMIN > ROLE_USER > IS_AUTHENTICATED_ANONYMOUSLY
"""

from enum import Enum


class SystemRole(str, Enum):
    """Role names understood by the default access policy."""

    SUPER_ADMIN = "ROLE_SUPER_ADMIN"
    """Unrestricted access (all permission bits)."""

    ADMIN = "ROLE_ADMIN"
    """Administrative control of the entity class."""

    USER = "ROLE_USER"
    """Authenticated user: may view and create."""

    ANONYMOUS = "IS_AUTHENTICATED_ANONYMOUSLY"
    """Unauthenticated visitor: view only."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all role names as strings.

        Returns:
            list[str]: Role names in declaration order.
        """
        return [role.value for role in cls]
