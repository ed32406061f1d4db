"""ObjectIdentity value object.

Identifies the domain entity an ACL is attached to: the entity's type plus
a stable identifier. Derived deterministically, so two lookups for the same
logical entity resolve to the same ACL.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class ObjectIdentity:
    """Type + identifier of a domain entity.

    Attributes:
        identifier: Stable identifier of the entity instance.
        type: Fully qualified class name of the entity.

    Raises:
        ValueError: If identifier or type is empty.
    """

    identifier: str
    type: str

    def __post_init__(self) -> None:
        """Validate both components are present.

        Raises:
            ValueError: If identifier or type is empty.
        """
        if not self.identifier:
            raise ValueError("Object identity identifier cannot be empty")
        if not self.type:
            raise ValueError("Object identity type cannot be empty")

    @classmethod
    def from_domain_object(cls, entity: Any) -> "ObjectIdentity":
        """Derive the object identity of a domain entity.

        Resolution order:
            1. ``entity.get_object_identifier()`` (DomainObject protocol)
            2. ``entity.id``

        Args:
            entity: Any domain entity instance.

        Returns:
            ObjectIdentity: Identity keyed by the entity's class and identifier.

        Raises:
            ValueError: If the entity exposes no usable identifier.

        Example:
            >>> ObjectIdentity.from_domain_object(account)
            ObjectIdentity(identifier='42', type='app.entities.Account')
        """
        if entity is None:
            raise ValueError("Cannot derive an object identity from None")

        entity_type = f"{type(entity).__module__}.{type(entity).__qualname__}"

        get_identifier = getattr(entity, "get_object_identifier", None)
        if callable(get_identifier):
            identifier = get_identifier()
        else:
            identifier = getattr(entity, "id", None)

        if identifier is None:
            raise ValueError(
                f"{entity_type} must expose get_object_identifier() or a non-null id"
            )

        return cls(identifier=str(identifier), type=entity_type)

    def __str__(self) -> str:
        return f"{self.type}#{self.identifier}"
