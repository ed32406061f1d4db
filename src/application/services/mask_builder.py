"""Permission mask building.

Two ways to turn named permissions into an integer mask:

- build_mask(): pure function, preferred for one-shot masks
- MaskBuilder: short-lived accumulator implementing MaskBuilderProtocol

A MaskBuilder is cheap; create a new one per mask instead of sharing one.

Usage:
    build_mask("create", "view")          # 3
    MaskBuilder().add("master").get()     # 64
"""

from collections.abc import Iterable

from src.domain.enums import Permission


def _to_bits(permission: "str | Permission | int") -> int:
    if isinstance(permission, Permission):
        return int(permission)
    if isinstance(permission, int):
        if permission < 0:
            raise ValueError(f"Permission bits cannot be negative: {permission}")
        return permission
    return int(Permission.from_name(permission))


def build_mask(*permissions: "str | Permission | int") -> int:
    """OR named permissions into a mask.

    Args:
        *permissions: Permission names, Permission members or raw bits.

    Returns:
        int: Combined mask (0 when no permission given).

    Raises:
        ValueError: If a name is unknown or raw bits are negative.
    """
    mask = 0
    for permission in permissions:
        mask |= _to_bits(permission)
    return mask


class MaskBuilder:
    """Mutable mask accumulator.

    Example:
        >>> MaskBuilder().add("view").add(Permission.CREATE).get()
        3
    """

    def __init__(self, mask: int = 0) -> None:
        self._mask = mask

    def reset(self) -> "MaskBuilder":
        """Clear all accumulated bits."""
        self._mask = 0
        return self

    def add(self, permission: "str | Permission | int") -> "MaskBuilder":
        """Add a permission.

        Raises:
            ValueError: If the permission name is unknown.
        """
        self._mask |= _to_bits(permission)
        return self

    def add_all(self, permissions: Iterable["str | Permission | int"]) -> "MaskBuilder":
        """Add several permissions."""
        for permission in permissions:
            self.add(permission)
        return self

    def remove(self, permission: "str | Permission | int") -> "MaskBuilder":
        """Clear a permission's bits."""
        self._mask &= ~_to_bits(permission)
        return self

    def get(self) -> int:
        """Return the accumulated mask."""
        return self._mask
