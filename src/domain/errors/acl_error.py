"""ACL error types.

These errors are part of the ACL service and provider contracts. They flow
as data inside Failure results and are never raised.

Architecture:
- Domain layer errors (part of protocol contracts)
- Inherit from DomainError (core layer)
- No automatic retry anywhere; retry policy belongs to the provider

Usage:
    from src.domain.errors import AclAlreadyExistsError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(AclAlreadyExistsError(
        code=ErrorCode.ACL_ALREADY_EXISTS,
        message="ACL already exists",
        object_identity=str(oid),
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AclError(DomainError):
    """Base ACL error."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidIdentityError(AclError):
    """Identity input could not be resolved to a SecurityIdentity.

    Returned when the input satisfies none of the identity source
    protocols, or resolution produced no identity. Not retryable.

    Attributes:
        identity_type: Runtime type name of the offending input.
    """

    identity_type: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidDomainObjectError(AclError):
    """Entity exposes no identifier an ObjectIdentity can be derived from.

    Attributes:
        entity_type: Runtime type name of the entity.
    """

    entity_type: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidEntryIndexError(AclError):
    """Entry insert position is outside the scope's entry list.

    Attributes:
        scope: Entry scope ("class" or "object").
        index: Requested position.
    """

    scope: str
    index: int


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidMaskError(AclError):
    """Permission mask is not a non-negative integer.

    Attributes:
        mask: Rejected mask.
    """

    mask: int


@dataclass(frozen=True, slots=True, kw_only=True)
class NoContextEntityError(AclError):
    """Manager has no context entity bound."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AclNotLoadedError(AclError):
    """Manager has no ACL loaded."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class NoIdentitySetError(AclError):
    """Manager has no security identity to apply permissions to."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AclStorageError(AclError):
    """Opaque failure from the ACL provider.

    After a failed persist the caller should discard and reload its ACL.

    Attributes:
        object_identity: String form of the affected ObjectIdentity.
    """

    object_identity: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AclAlreadyExistsError(AclStorageError):
    """An ACL already exists for the ObjectIdentity (create_acl)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AclNotFoundError(AclStorageError):
    """No ACL exists for the ObjectIdentity (find_acl, update_acl)."""

    pass
