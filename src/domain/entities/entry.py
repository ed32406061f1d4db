"""Access control entry (ACE).

One permission entry of an ACL: who (security identity), what (mask) and
whether it grants or denies. Entries are immutable; updating a mask
replaces the entry at its position, which lets callers snapshot an entry
list cheaply and restore it later.
"""

from dataclasses import dataclass, field, replace
from typing import cast
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.value_objects import SecurityIdentity


def _new_entry_id() -> UUID:
    return cast(UUID, uuid7())


@dataclass(frozen=True, kw_only=True)
class Entry:
    """Access control entry.

    Attributes:
        security_identity: Identity the entry applies to.
        mask: Permission mask (OR of Permission bits).
        granting: True for a grant entry, False for an explicit deny.
        audit_success: Audit successful checks that matched this entry.
        audit_failure: Audit failed checks that matched this entry.
        id: Entry identifier (uuid7, time-ordered).

    Example:
        >>> entry = Entry(security_identity=SecurityIdentity.for_role("ROLE_USER"), mask=3)
        >>> entry.with_mask(1).mask
        1
    """

    security_identity: SecurityIdentity
    mask: int
    granting: bool = True
    audit_success: bool = False
    audit_failure: bool = False
    id: UUID = field(default_factory=_new_entry_id)

    def __post_init__(self) -> None:
        """Validate mask.

        Raises:
            ValueError: If mask is negative.
        """
        if self.mask < 0:
            raise ValueError(f"Entry mask cannot be negative: {self.mask}")

    def with_mask(self, mask: int) -> "Entry":
        """Return a copy of this entry carrying a new mask (same id)."""
        return replace(self, mask=mask)

    def belongs_to(self, identity: SecurityIdentity) -> bool:
        """Check whether this entry is for the given identity (value equality)."""
        return self.security_identity == identity
