"""ACL database models.

Tables:
    acl_object_identities: one row per ACL, unique on (object_type, identifier)
    acl_entries: one row per entry, ordered by (scope, position)
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, BaseMutableModel


class AclObjectIdentityModel(BaseMutableModel):
    """ACL header row.

    Fields:
        id: ACL id (same value as the domain Acl.id)
        object_type: Fully qualified class name of the protected entity
        identifier: Entity identifier
        parent_id: Parent ACL id (inheritance source)
        entries_inheriting: Whether entries inherit from the parent ACL
    """

    __tablename__ = "acl_object_identities"

    object_type: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Fully qualified class name of the protected entity",
    )

    identifier: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Identifier of the protected entity",
    )

    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("acl_object_identities.id", ondelete="SET NULL"),
        nullable=True,
    )

    entries_inheriting: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    __table_args__ = (
        UniqueConstraint("object_type", "identifier", name="uq_acl_object_identity"),
    )

    def __repr__(self) -> str:
        return f"<AclObjectIdentityModel(type={self.object_type}, identifier={self.identifier})>"


class AclEntryModel(BaseModel):
    """ACL entry row.

    Rows of an ACL are deleted and re-inserted as a whole on every update,
    so position always matches the domain list index.

    Fields:
        acl_id: Owning ACL
        scope: "class" or "object"
        position: Index within the scope's entry list
        identity_kind: "principal" or "role"
        identity_key: Account key or role name
        mask: Permission mask
        granting: Grant (True) or deny (False)
        audit_success / audit_failure: Audit flags
    """

    __tablename__ = "acl_entries"

    acl_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("acl_object_identities.id", ondelete="CASCADE"),
        nullable=False,
    )

    scope: Mapped[str] = mapped_column(String(10), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    identity_kind: Mapped[str] = mapped_column(String(20), nullable=False)
    identity_key: Mapped[str] = mapped_column(String(200), nullable=False)
    mask: Mapped[int] = mapped_column(Integer, nullable=False)
    granting: Mapped[bool] = mapped_column(Boolean, nullable=False)
    audit_success: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    audit_failure: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("acl_id", "scope", "position", name="uq_acl_entry_position"),
        Index("idx_acl_entries_identity", "identity_kind", "identity_key"),
    )
