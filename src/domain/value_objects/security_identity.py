"""SecurityIdentity value object.

Canonical identifier for a principal or a role. Used as the lookup key
when matching ACL entries, so equality is structural: two identities built
separately from the same role name are the same identity.
"""

from dataclasses import dataclass

from src.domain.enums import SecurityIdentityKind


@dataclass(frozen=True, slots=True, kw_only=True)
class SecurityIdentity:
    """Principal or role identity.

    Attributes:
        kind: PRINCIPAL or ROLE.
        key: Stable account key (principal) or role name (role).

    Raises:
        TypeError: If key is not a string.
        ValueError: If key is empty.

    Example:
        >>> SecurityIdentity.for_role("ROLE_ADMIN") == SecurityIdentity.for_role("ROLE_ADMIN")
        True
        >>> str(SecurityIdentity.for_principal("alice"))
        'principal:alice'
    """

    kind: SecurityIdentityKind
    key: str

    def __post_init__(self) -> None:
        """Reject empty keys.

        Raises:
            TypeError: If key is not a string.
            ValueError: If key is empty or whitespace.
        """
        if not isinstance(self.key, str):
            raise TypeError(
                f"{self.kind.value} identity key must be a string, "
                f"got {type(self.key).__name__}"
            )
        if not self.key.strip():
            raise ValueError(f"{self.kind.value} identity key cannot be empty")

    @classmethod
    def for_principal(cls, account_key: str | int) -> "SecurityIdentity":
        """Build a principal identity from an account key.

        Integer keys (numeric user ids) are converted to their string form.
        """
        if isinstance(account_key, int) and not isinstance(account_key, bool):
            account_key = str(account_key)
        return cls(kind=SecurityIdentityKind.PRINCIPAL, key=account_key)

    @classmethod
    def for_role(cls, role_name: str) -> "SecurityIdentity":
        """Build a role identity from a role name."""
        return cls(kind=SecurityIdentityKind.ROLE, key=role_name)

    @property
    def is_role(self) -> bool:
        """True for role identities."""
        return self.kind == SecurityIdentityKind.ROLE

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.key}"
