"""Permission bits for ACL masks.

Masks are plain integers built by OR-ing named permission bits. The values
match the Symfony MaskBuilder vocabulary so masks stay interchangeable with
ACL tables written by that component.

Usage:
    from src.domain.enums import Permission

    mask = int(Permission.CREATE | Permission.VIEW)  # 3
    Permission.from_name("master")                   # Permission.MASTER
"""

from enum import IntFlag


class Permission(IntFlag):
    """Named permission bits.

    Bits:
        VIEW: Read access.
        CREATE: Create new instances.
        EDIT: Modify existing instances.
        DELETE: Remove instances.
        UNDELETE: Restore removed instances.
        OPERATOR: VIEW + EDIT + CREATE + DELETE + UNDELETE semantics.
        MASTER: OPERATOR + right to grant OPERATOR-level permissions.
        OWNER: MASTER + right to grant MASTER-level permissions.
        IDDQD: Every bit (super-admin).
    """

    VIEW = 1
    CREATE = 2
    EDIT = 4
    DELETE = 8
    UNDELETE = 16
    OPERATOR = 32
    MASTER = 64
    OWNER = 128
    IDDQD = (1 << 30) - 1

    @classmethod
    def from_name(cls, name: "str | Permission") -> "Permission":
        """Look up a permission bit by case-insensitive name.

        Args:
            name: Permission name ("view", "MASTER", ...) or a Permission.

        Returns:
            Permission: The matching bit.

        Raises:
            ValueError: If no permission has that name.
        """
        if isinstance(name, Permission):
            return name
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown permission: {name!r}") from None
