"""Security identity resolution.

Turns the heterogeneous identity inputs a host application has at hand
into one canonical SecurityIdentity:

    str             -> wrapped in Role, then resolved as a role
    Principal       -> principal identity keyed by account_key
    AuthToken       -> principal identity of the token's principal
    RoleValue       -> role identity keyed by role_name

Pure function, no side effects.
"""

from typing import Any

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import InvalidIdentityError
from src.domain.protocols import AuthToken, Principal, RoleValue
from src.domain.value_objects import Role, SecurityIdentity


def resolve_security_identity(
    identity: Any,
) -> Result[SecurityIdentity, InvalidIdentityError]:
    """Resolve an identity input to a SecurityIdentity.

    Args:
        identity: Role name, RoleValue, Principal or AuthToken.

    Returns:
        Success(SecurityIdentity): Canonical identity.
        Failure(InvalidIdentityError): Input has none of the accepted
            capabilities, or resolution produced no identity.

    Example:
        >>> resolve_security_identity("ROLE_ADMIN")
        Success(value=SecurityIdentity(kind=<SecurityIdentityKind.ROLE: 'role'>, key='ROLE_ADMIN'))
    """
    if isinstance(identity, str):
        identity = Role(identity)

    identity_type = type(identity).__name__

    if not isinstance(identity, (Principal, AuthToken, RoleValue)):
        return Failure(
            error=InvalidIdentityError(
                code=ErrorCode.INVALID_IDENTITY,
                message=(
                    "Identity must implement one of: Principal, AuthToken, "
                    f"RoleValue ({identity_type} given)"
                ),
                identity_type=identity_type,
            )
        )

    security_identity: SecurityIdentity | None = None
    try:
        if isinstance(identity, Principal):
            security_identity = SecurityIdentity.for_principal(identity.account_key)
        elif isinstance(identity, AuthToken):
            security_identity = _from_token(identity)
        elif isinstance(identity, RoleValue):
            security_identity = SecurityIdentity.for_role(identity.role_name)
    except (TypeError, ValueError, AttributeError):
        security_identity = None

    if security_identity is None:
        return Failure(
            error=InvalidIdentityError(
                code=ErrorCode.INVALID_IDENTITY,
                message="Couldn't create a valid SecurityIdentity with the provided identity information",
                identity_type=identity_type,
            )
        )

    return Success(value=security_identity)


def _from_token(token: AuthToken) -> SecurityIdentity | None:
    principal = token.principal
    if isinstance(principal, Principal):
        return SecurityIdentity.for_principal(principal.account_key)
    if isinstance(principal, str):
        return SecurityIdentity.for_principal(principal)
    return None
