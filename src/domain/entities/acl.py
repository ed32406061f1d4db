"""Acl domain entity.

An ACL is attached to one ObjectIdentity and carries two ordered entry
lists: class-scoped entries (apply to every instance of the entity type)
and object-scoped entries (apply to this instance only). Position within a
list is evaluation precedence, so inserts and deletes preserve the relative
order of untouched entries.

Entry Accessors:
    All accessors take an AceScope tag selecting the list they operate on.
    Index violations raise IndexError (programming error, not domain error).
"""

from dataclasses import dataclass, field
from typing import cast
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.entities.entry import Entry
from src.domain.enums import AceScope
from src.domain.value_objects import ObjectIdentity, SecurityIdentity


def _new_acl_id() -> UUID:
    return cast(UUID, uuid7())


@dataclass
class Acl:
    """Access control list for one domain entity.

    Attributes:
        object_identity: Entity this ACL protects.
        class_entries: Ordered class-scoped entries.
        object_entries: Ordered object-scoped entries.
        parent_acl: Optional parent ACL (inheritance source).
        entries_inheriting: Whether entries are inherited from parent_acl.
        id: ACL identifier.

    Example:
        >>> acl = Acl(object_identity=ObjectIdentity(identifier="1", type="app.Post"))
        >>> acl.insert_entry(AceScope.CLASS, SecurityIdentity.for_role("ROLE_USER"), 1)
        >>> len(acl.get_entries(AceScope.CLASS))
        1
    """

    object_identity: ObjectIdentity
    class_entries: list[Entry] = field(default_factory=list)
    object_entries: list[Entry] = field(default_factory=list)
    parent_acl: "Acl | None" = None
    entries_inheriting: bool = True
    id: UUID = field(default_factory=_new_acl_id)

    def _entries(self, scope: AceScope) -> list[Entry]:
        if scope == AceScope.CLASS:
            return self.class_entries
        return self.object_entries

    def get_entries(self, scope: AceScope) -> list[Entry]:
        """Return a copy of the entries of a scope, in order.

        Args:
            scope: CLASS or OBJECT.

        Returns:
            list[Entry]: Entries (mutating the copy does not affect the ACL).
        """
        return list(self._entries(scope))

    def insert_entry(
        self,
        scope: AceScope,
        security_identity: SecurityIdentity,
        mask: int,
        index: int = 0,
        granting: bool = True,
    ) -> Entry:
        """Insert a new entry at index, shifting later entries down.

        Args:
            scope: CLASS or OBJECT.
            security_identity: Identity the entry applies to.
            mask: Permission mask.
            index: Position of the new entry (0..len).
            granting: True for grant, False for deny.

        Returns:
            Entry: The inserted entry.

        Raises:
            IndexError: If index is outside 0..len(entries).
        """
        entries = self._entries(scope)
        if index < 0 or index > len(entries):
            raise IndexError(
                f"Cannot insert {scope.value} entry at {index}; "
                f"valid range is 0..{len(entries)}"
            )
        entry = Entry(security_identity=security_identity, mask=mask, granting=granting)
        entries.insert(index, entry)
        return entry

    def update_entry(self, scope: AceScope, index: int, mask: int) -> Entry:
        """Replace the mask of the entry at index, keeping its position.

        Raises:
            IndexError: If there is no entry at index.
        """
        entries = self._entries(scope)
        self._check_index(scope, entries, index)
        entries[index] = entries[index].with_mask(mask)
        return entries[index]

    def delete_entry(self, scope: AceScope, index: int) -> Entry:
        """Remove the entry at index; later entries shift up by one.

        Raises:
            IndexError: If there is no entry at index.
        """
        entries = self._entries(scope)
        self._check_index(scope, entries, index)
        return entries.pop(index)

    def replace_entries(self, scope: AceScope, entries: list[Entry]) -> None:
        """Replace all entries of a scope (used to restore a snapshot)."""
        self._entries(scope)[:] = entries

    @staticmethod
    def _check_index(scope: AceScope, entries: list[Entry], index: int) -> None:
        if index < 0 or index >= len(entries):
            raise IndexError(f"No {scope.value} entry at index {index}")
