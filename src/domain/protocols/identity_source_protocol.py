"""Identity source protocols.

Host applications hand the ACL manager their own user, token and role
objects. Anything exposing the attributes below is accepted; the checks
are structural (runtime_checkable), so no base class is required.

Usage:
    @dataclass
    class User:
        account_key: str

    isinstance(User("alice"), Principal)  # True
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Principal(Protocol):
    """Authenticated account.

    Attributes:
        account_key: Stable, unique account key (e.g. username).
    """

    account_key: str


@runtime_checkable
class AuthToken(Protocol):
    """Authentication token carrying the authenticated principal.

    Attributes:
        principal: A Principal, or the account key as a plain string.
    """

    principal: Any


@runtime_checkable
class RoleValue(Protocol):
    """Role object.

    Attributes:
        role_name: Role name (e.g. "ROLE_ADMIN").
    """

    role_name: str


@runtime_checkable
class DomainObject(Protocol):
    """Entity that supplies its own ACL identifier."""

    def get_object_identifier(self) -> str:
        """Return the stable identifier used for the entity's ACL."""
        ...
