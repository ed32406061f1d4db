"""Role value object.

Bare role names handed to the identity resolver are wrapped in a Role so
every role source exposes the same ``role_name`` attribute.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Role:
    """Named role.

    Attributes:
        role_name: Role name (e.g. "ROLE_ADMIN").
    """

    role_name: str

    def __str__(self) -> str:
        return self.role_name
