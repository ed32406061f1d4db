"""Domain errors package.

Exports all ACL error classes for convenient importing.

Usage:
    from src.domain.errors import AclError, InvalidIdentityError
"""

from src.domain.errors.acl_error import (
    AclAlreadyExistsError,
    AclError,
    AclNotFoundError,
    AclNotLoadedError,
    AclStorageError,
    InvalidDomainObjectError,
    InvalidEntryIndexError,
    InvalidIdentityError,
    InvalidMaskError,
    NoContextEntityError,
    NoIdentitySetError,
)

__all__ = [
    "AclError",
    # Input errors
    "InvalidIdentityError",
    "InvalidDomainObjectError",
    "InvalidEntryIndexError",
    "InvalidMaskError",
    # Manager precondition errors
    "NoContextEntityError",
    "AclNotLoadedError",
    "NoIdentitySetError",
    # Storage errors
    "AclStorageError",
    "AclAlreadyExistsError",
    "AclNotFoundError",
]
