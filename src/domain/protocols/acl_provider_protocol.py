"""ACL provider protocol (port) for ACL storage.

The provider owns ACL persistence. The ACL services only ever call
create_acl, find_acl and update_acl; how entries are stored is up to the
adapter.

Implementations:
    - InMemoryAclProvider: Testing / single-process use
    - SqlAlchemyAclProvider: Relational storage (SQLAlchemy ORM)

Concurrency:
    The services perform read-modify-write on an ACL's entry lists without
    locking. Adapters that allow concurrent writers to the same ACL must
    serialize them (transactions, row locks, versioning).
"""

from typing import Protocol

from src.core.result import Result
from src.domain.entities import Acl
from src.domain.errors import AclStorageError
from src.domain.value_objects import ObjectIdentity


class AclProviderProtocol(Protocol):
    """Mutable ACL provider.

    Error Handling:
        Operations return Result; failures are AclStorageError or one of
        its subclasses (AclAlreadyExistsError, AclNotFoundError).
    """

    def create_acl(self, object_identity: ObjectIdentity) -> Result[Acl, AclStorageError]:
        """Create an empty ACL for an object identity.

        Args:
            object_identity: Entity the ACL protects.

        Returns:
            Success(Acl): Newly created, empty ACL.
            Failure(AclAlreadyExistsError): An ACL already exists.
            Failure(AclStorageError): Storage failure.
        """
        ...

    def find_acl(self, object_identity: ObjectIdentity) -> Result[Acl, AclStorageError]:
        """Find the ACL of an object identity.

        Returns:
            Success(Acl): The stored ACL.
            Failure(AclNotFoundError): No ACL for the identity.
            Failure(AclStorageError): Storage failure.
        """
        ...

    def update_acl(self, acl: Acl) -> Result[None, AclStorageError]:
        """Persist the entry lists of an ACL.

        Returns:
            Success(None): ACL persisted.
            Failure(AclNotFoundError): ACL was never created.
            Failure(AclStorageError): Storage failure.
        """
        ...

    def delete_acl(self, object_identity: ObjectIdentity) -> Result[None, AclStorageError]:
        """Delete the ACL of an object identity.

        Returns:
            Success(None): ACL deleted.
            Failure(AclNotFoundError): No ACL for the identity.
        """
        ...
