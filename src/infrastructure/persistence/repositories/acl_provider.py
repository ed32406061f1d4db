"""SqlAlchemyAclProvider - SQLAlchemy implementation of AclProviderProtocol.

Adapter for hexagonal architecture. Maps between the domain Acl / Entry
and the acl_object_identities / acl_entries tables.

Each operation runs in its own transaction. update_acl replaces all entry
rows of the ACL inside that transaction, so a failure leaves the stored
entries untouched.
"""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import Acl, Entry
from src.domain.enums import AceScope, SecurityIdentityKind
from src.domain.errors import AclAlreadyExistsError, AclNotFoundError, AclStorageError
from src.domain.protocols import LoggerProtocol
from src.domain.value_objects import ObjectIdentity, SecurityIdentity
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models import AclEntryModel, AclObjectIdentityModel


class SqlAlchemyAclProvider:
    """Relational ACL provider.

    Attributes:
        database: Database supplying transactional sessions.

    Example:
        >>> db = Database("sqlite://")
        >>> db.create_all()
        >>> provider = SqlAlchemyAclProvider(db, logger)
        >>> provider.create_acl(ObjectIdentity(identifier="1", type="app.Post"))
    """

    def __init__(self, database: Database, logger: LoggerProtocol) -> None:
        """Initialize provider.

        Args:
            database: Database wrapper (engine + session factory).
            logger: Structured logger.
        """
        self.database = database
        self._logger = logger

    def create_acl(self, object_identity: ObjectIdentity) -> Result[Acl, AclStorageError]:
        """Insert an ACL header row for the object identity.

        Returns:
            Success(Acl): New, empty ACL.
            Failure(AclAlreadyExistsError): (type, identifier) already stored.
            Failure(AclStorageError): Database failure.
        """
        acl = Acl(object_identity=object_identity)
        try:
            with self.database.get_session() as session:
                session.add(
                    AclObjectIdentityModel(
                        id=acl.id,
                        object_type=object_identity.type,
                        identifier=object_identity.identifier,
                        entries_inheriting=acl.entries_inheriting,
                    )
                )
        except IntegrityError:
            return Failure(
                error=AclAlreadyExistsError(
                    code=ErrorCode.ACL_ALREADY_EXISTS,
                    message="ACL already exists for object identity",
                    object_identity=str(object_identity),
                )
            )
        except SQLAlchemyError as e:
            return Failure(error=self._storage_error("create_acl", object_identity, e))

        return Success(value=acl)

    def find_acl(self, object_identity: ObjectIdentity) -> Result[Acl, AclStorageError]:
        """Load an ACL with its entries (and parent chain).

        Returns:
            Success(Acl): Stored ACL.
            Failure(AclNotFoundError): Nothing stored for the identity.
            Failure(AclStorageError): Database failure.
        """
        try:
            with self.database.get_session() as session:
                model = self._find_model(session, object_identity)
                if model is None:
                    return Failure(error=self._not_found(object_identity))
                return Success(value=self._to_domain(session, model))
        except SQLAlchemyError as e:
            return Failure(error=self._storage_error("find_acl", object_identity, e))

    def update_acl(self, acl: Acl) -> Result[None, AclStorageError]:
        """Persist header fields and replace all entry rows of the ACL.

        Returns:
            Success(None): ACL persisted.
            Failure(AclNotFoundError): ACL was never created.
            Failure(AclStorageError): Database failure (nothing persisted).
        """
        try:
            with self.database.get_session() as session:
                model = session.get(AclObjectIdentityModel, acl.id)
                if model is None:
                    return Failure(error=self._not_found(acl.object_identity))

                model.entries_inheriting = acl.entries_inheriting
                model.parent_id = acl.parent_acl.id if acl.parent_acl is not None else None

                session.execute(delete(AclEntryModel).where(AclEntryModel.acl_id == acl.id))
                session.add_all(
                    self._to_models(acl, AceScope.CLASS)
                    + self._to_models(acl, AceScope.OBJECT)
                )
        except SQLAlchemyError as e:
            return Failure(error=self._storage_error("update_acl", acl.object_identity, e))

        return Success(value=None)

    def delete_acl(self, object_identity: ObjectIdentity) -> Result[None, AclStorageError]:
        """Delete an ACL and its entries.

        Returns:
            Success(None): ACL deleted.
            Failure(AclNotFoundError): Nothing stored for the identity.
            Failure(AclStorageError): Database failure.
        """
        try:
            with self.database.get_session() as session:
                model = self._find_model(session, object_identity)
                if model is None:
                    return Failure(error=self._not_found(object_identity))
                session.execute(delete(AclEntryModel).where(AclEntryModel.acl_id == model.id))
                session.delete(model)
        except SQLAlchemyError as e:
            return Failure(error=self._storage_error("delete_acl", object_identity, e))

        return Success(value=None)

    # =========================================================================
    # Mapping
    # =========================================================================

    @staticmethod
    def _find_model(
        session: Session, object_identity: ObjectIdentity
    ) -> AclObjectIdentityModel | None:
        stmt = select(AclObjectIdentityModel).where(
            AclObjectIdentityModel.object_type == object_identity.type,
            AclObjectIdentityModel.identifier == object_identity.identifier,
        )
        return session.execute(stmt).scalar_one_or_none()

    def _to_domain(self, session: Session, model: AclObjectIdentityModel) -> Acl:
        """Convert header + entry rows to a domain Acl."""
        parent = None
        if model.parent_id is not None:
            parent_model = session.get(AclObjectIdentityModel, model.parent_id)
            if parent_model is not None:
                parent = self._to_domain(session, parent_model)

        stmt = (
            select(AclEntryModel)
            .where(AclEntryModel.acl_id == model.id)
            .order_by(AclEntryModel.scope, AclEntryModel.position)
        )
        class_entries: list[Entry] = []
        object_entries: list[Entry] = []
        for row in session.execute(stmt).scalars():
            entry = Entry(
                id=row.id,
                security_identity=SecurityIdentity(
                    kind=SecurityIdentityKind(row.identity_kind),
                    key=row.identity_key,
                ),
                mask=row.mask,
                granting=row.granting,
                audit_success=row.audit_success,
                audit_failure=row.audit_failure,
            )
            if row.scope == AceScope.CLASS.value:
                class_entries.append(entry)
            else:
                object_entries.append(entry)

        return Acl(
            id=model.id,
            object_identity=ObjectIdentity(
                identifier=model.identifier,
                type=model.object_type,
            ),
            class_entries=class_entries,
            object_entries=object_entries,
            parent_acl=parent,
            entries_inheriting=model.entries_inheriting,
        )

    @staticmethod
    def _to_models(acl: Acl, scope: AceScope) -> list[AclEntryModel]:
        return [
            AclEntryModel(
                id=entry.id,
                acl_id=acl.id,
                scope=scope.value,
                position=position,
                identity_kind=entry.security_identity.kind.value,
                identity_key=entry.security_identity.key,
                mask=entry.mask,
                granting=entry.granting,
                audit_success=entry.audit_success,
                audit_failure=entry.audit_failure,
            )
            for position, entry in enumerate(acl.get_entries(scope))
        ]

    @staticmethod
    def _not_found(object_identity: ObjectIdentity) -> AclNotFoundError:
        return AclNotFoundError(
            code=ErrorCode.ACL_NOT_FOUND,
            message="No ACL found for object identity",
            object_identity=str(object_identity),
        )

    def _storage_error(
        self, operation: str, object_identity: ObjectIdentity, error: SQLAlchemyError
    ) -> AclStorageError:
        self._logger.error(
            "acl_storage_error",
            error=error,
            operation=operation,
            object_identity=str(object_identity),
        )
        return AclStorageError(
            code=ErrorCode.ACL_STORAGE_FAILED,
            message=f"ACL {operation} failed",
            object_identity=str(object_identity),
            details={"error_type": type(error).__name__},
        )
