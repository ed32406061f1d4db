"""Kinds of security identity."""

from enum import Enum


class SecurityIdentityKind(str, Enum):
    """Kind of a SecurityIdentity.

    PRINCIPAL identities are keyed by a stable account key (username).
    ROLE identities are keyed by role name.
    """

    PRINCIPAL = "principal"
    ROLE = "role"
