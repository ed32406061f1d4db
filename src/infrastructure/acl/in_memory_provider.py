"""In-memory implementation of AclProviderProtocol.

Stores a deep copy of every ACL, keyed by ObjectIdentity. Callers never
share objects with the store: create_acl and find_acl return copies and
update_acl stores a copy, which mirrors the behavior of a real database.

Not thread-safe.
"""

from copy import deepcopy

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import Acl
from src.domain.errors import AclAlreadyExistsError, AclNotFoundError, AclStorageError
from src.domain.value_objects import ObjectIdentity


class InMemoryAclProvider:
    """Dict-backed ACL provider.

    Attributes:
        update_count: Number of successful update_acl calls.
    """

    def __init__(self) -> None:
        self._acls: dict[ObjectIdentity, Acl] = {}
        self.update_count = 0

    def create_acl(self, object_identity: ObjectIdentity) -> Result[Acl, AclStorageError]:
        """Create an empty ACL.

        Returns:
            Success(Acl): Copy of the stored ACL.
            Failure(AclAlreadyExistsError): ACL already exists.
        """
        if object_identity in self._acls:
            return Failure(
                error=AclAlreadyExistsError(
                    code=ErrorCode.ACL_ALREADY_EXISTS,
                    message="ACL already exists for object identity",
                    object_identity=str(object_identity),
                )
            )
        acl = Acl(object_identity=object_identity)
        self._acls[object_identity] = acl
        return Success(value=deepcopy(acl))

    def find_acl(self, object_identity: ObjectIdentity) -> Result[Acl, AclStorageError]:
        """Find an ACL.

        Returns:
            Success(Acl): Copy of the stored ACL.
            Failure(AclNotFoundError): No ACL stored.
        """
        acl = self._acls.get(object_identity)
        if acl is None:
            return Failure(error=self._not_found(object_identity))
        return Success(value=deepcopy(acl))

    def update_acl(self, acl: Acl) -> Result[None, AclStorageError]:
        """Store a copy of the ACL.

        Returns:
            Success(None): ACL stored.
            Failure(AclNotFoundError): ACL was never created.
        """
        if acl.object_identity not in self._acls:
            return Failure(error=self._not_found(acl.object_identity))
        self._acls[acl.object_identity] = deepcopy(acl)
        self.update_count += 1
        return Success(value=None)

    def delete_acl(self, object_identity: ObjectIdentity) -> Result[None, AclStorageError]:
        """Remove an ACL.

        Returns:
            Success(None): ACL removed.
            Failure(AclNotFoundError): No ACL stored.
        """
        if self._acls.pop(object_identity, None) is None:
            return Failure(error=self._not_found(object_identity))
        return Success(value=None)

    def __len__(self) -> int:
        return len(self._acls)

    @staticmethod
    def _not_found(object_identity: ObjectIdentity) -> AclNotFoundError:
        return AclNotFoundError(
            code=ErrorCode.ACL_NOT_FOUND,
            message="No ACL found for object identity",
            object_identity=str(object_identity),
        )
