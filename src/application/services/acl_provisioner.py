"""ACL provisioning service.

Loads the ACL of a domain entity, creating it on first access.

Provisioning Order:
    create_acl is attempted first; AclAlreadyExistsError falls back to
    find_acl. A concurrent creator therefore never produces a spurious
    "not found" between a find and a create. Any other provider failure is
    returned unchanged.
"""

from typing import Any

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import Acl
from src.domain.errors import AclAlreadyExistsError, AclError, InvalidDomainObjectError
from src.domain.protocols import AclProviderProtocol, LoggerProtocol
from src.domain.value_objects import ObjectIdentity


class AclProvisioner:
    """Load-or-create ACLs through an ACL provider.

    Dependencies (injected via constructor):
        - AclProviderProtocol: ACL storage
        - LoggerProtocol: Structured logging

    Example:
        >>> provisioner = AclProvisioner(provider=InMemoryAclProvider(), logger=logger)
        >>> result = provisioner.load_or_create(post)
        >>> if isinstance(result, Success):
        ...     acl = result.value
    """

    def __init__(
        self,
        provider: AclProviderProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize provisioner with dependencies.

        Args:
            provider: ACL storage provider.
            logger: Structured logger.
        """
        self._provider = provider
        self._logger = logger

    def load_or_create(self, entity: Any) -> Result[Acl, AclError]:
        """Return the entity's ACL, creating an empty one if none exists.

        Args:
            entity: Domain entity (DomainObject or object with an ``id``).

        Returns:
            Success(Acl): Existing or newly created ACL.
            Failure(InvalidDomainObjectError): Entity has no identifier.
            Failure(AclStorageError): Provider failure (other than
                "already exists").
        """
        try:
            object_identity = ObjectIdentity.from_domain_object(entity)
        except ValueError as e:
            self._logger.warning(
                "acl_provision_rejected",
                entity_type=type(entity).__name__,
                reason=str(e),
            )
            return Failure(
                error=InvalidDomainObjectError(
                    code=ErrorCode.INVALID_DOMAIN_OBJECT,
                    message=str(e),
                    entity_type=type(entity).__name__,
                )
            )

        return self.load_or_create_for_identity(object_identity)

    def load_or_create_for_identity(
        self, object_identity: ObjectIdentity
    ) -> Result[Acl, AclError]:
        """Return the ACL of an object identity, creating it if absent.

        Args:
            object_identity: Identity of the protected entity.

        Returns:
            Success(Acl): Existing or newly created ACL.
            Failure(AclStorageError): Provider failure.
        """
        create_result = self._provider.create_acl(object_identity)

        match create_result:
            case Success(value=acl):
                self._logger.info(
                    "acl_created",
                    object_identity=str(object_identity),
                    acl_id=str(acl.id),
                )
                return Success(value=acl)
            case Failure(error=AclAlreadyExistsError()):
                pass
            case Failure(error=error):
                self._logger.error(
                    "acl_provision_failed",
                    object_identity=str(object_identity),
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Failure(error=error)

        find_result = self._provider.find_acl(object_identity)

        match find_result:
            case Success(value=acl):
                self._logger.debug(
                    "acl_loaded",
                    object_identity=str(object_identity),
                    acl_id=str(acl.id),
                )
                return Success(value=acl)
            case Failure(error=error):
                self._logger.error(
                    "acl_provision_failed",
                    object_identity=str(object_identity),
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Failure(error=error)
