"""ACL manager - session facade over the ACL services.

Holds the state of one permission-editing session and delegates the work
to AclProvisioner, PermissionReconciler and resolve_security_identity.

Session State:
    Empty -> EntityBound (set_context_entity) -> AclLoaded (load_acl)
    NoIdentity -> IdentitySet (add_security_identity / create_security_identity)

    Permission setters need AclLoaded and IdentitySet. The current identity
    is the first one added.

Usage:
    manager = AclManager(provider=provider, logger=logger)
    manager.set_context_entity(post)
    manager.load_acl()
    manager.create_security_identity(user)

    mask = manager.get_mask_builder().add("edit").add("view").get()
    result = manager.set_object_permission(mask)
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from src.application.services.acl_provisioner import AclProvisioner
from src.application.services.identity_resolver import resolve_security_identity
from src.application.services.mask_builder import MaskBuilder, build_mask
from src.application.services.permission_reconciler import PermissionReconciler
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import Acl
from src.domain.enums import AceScope, Permission, SystemRole
from src.domain.errors import (
    AclError,
    AclNotLoadedError,
    InvalidIdentityError,
    NoContextEntityError,
    NoIdentitySetError,
)
from src.domain.protocols import AclProviderProtocol, LoggerProtocol
from src.domain.value_objects import SecurityIdentity


@dataclass(frozen=True, kw_only=True)
class DefaultAccessRule:
    """One class-scoped grant of the default access policy.

    Attributes:
        role: Role name receiving the grant.
        permissions: Permissions OR-ed into the granted mask.
    """

    role: str
    permissions: tuple[str | Permission, ...]

    @property
    def mask(self) -> int:
        """Granted mask."""
        return build_mask(*self.permissions)


DEFAULT_ACCESS_POLICY: tuple[DefaultAccessRule, ...] = (
    DefaultAccessRule(role=SystemRole.SUPER_ADMIN.value, permissions=(Permission.IDDQD,)),
    DefaultAccessRule(role=SystemRole.ADMIN.value, permissions=(Permission.MASTER,)),
    DefaultAccessRule(role=SystemRole.ANONYMOUS.value, permissions=(Permission.VIEW,)),
    DefaultAccessRule(
        role=SystemRole.USER.value,
        permissions=(Permission.CREATE, Permission.VIEW),
    ),
)
"""Class-level grants installed by AclManager.install_default_access()."""


class AclManager:
    """Stateful facade for editing the ACL of one entity.

    Not thread-safe: use one manager per session / request.

    Dependencies (injected via constructor):
        - AclProviderProtocol: ACL storage
        - LoggerProtocol: Structured logging

    Attributes:
        default_access_policy: Grants applied by install_default_access().
        insert_index: Preferred position of new entries (past the end appends).
    """

    def __init__(
        self,
        provider: AclProviderProtocol,
        logger: LoggerProtocol,
        *,
        default_access_policy: Sequence[DefaultAccessRule] = DEFAULT_ACCESS_POLICY,
        insert_index: int = 0,
    ) -> None:
        """Initialize manager with dependencies.

        Args:
            provider: ACL storage provider shared by the underlying services.
            logger: Structured logger.
            default_access_policy: Grants for install_default_access().
            insert_index: Preferred position of new entries; clamped to the
                end of the scope's entry list.
        """
        self._logger = logger
        self._provisioner = AclProvisioner(provider=provider, logger=logger)
        self._reconciler = PermissionReconciler(provider=provider, logger=logger)
        self.default_access_policy = tuple(default_access_policy)
        self.insert_index = insert_index

        self._context_entity: Any = None
        self._acl: Acl | None = None
        self._security_identities: list[SecurityIdentity] = []

    # =========================================================================
    # Session state
    # =========================================================================

    @property
    def context_entity(self) -> Any:
        """Entity under management (None when unbound)."""
        return self._context_entity

    @property
    def acl(self) -> Acl | None:
        """Loaded ACL (None until load_acl succeeds)."""
        return self._acl

    @property
    def security_identities(self) -> list[SecurityIdentity]:
        """Identities added to this session, in insertion order."""
        return list(self._security_identities)

    @property
    def security_identity(self) -> SecurityIdentity | None:
        """Current identity: the first one added."""
        return self._security_identities[0] if self._security_identities else None

    def set_context_entity(self, entity: Any) -> "AclManager":
        """Bind the entity whose ACL is edited.

        Binding a different entity drops the loaded ACL; rebinding the same
        entity keeps it.
        """
        if entity is not self._context_entity:
            self._acl = None
        self._context_entity = entity
        return self

    def is_acl_loaded(self) -> bool:
        return self._acl is not None

    def has_security_identity(self) -> bool:
        return bool(self._security_identities)

    def add_security_identity(self, security_identity: SecurityIdentity) -> "AclManager":
        self._security_identities.append(security_identity)
        return self

    def create_security_identity(
        self, identity: Any
    ) -> Result[SecurityIdentity, InvalidIdentityError]:
        """Resolve an identity input and add it to the session.

        Args:
            identity: Role name, RoleValue, Principal or AuthToken.

        Returns:
            Success(SecurityIdentity): Resolved (and added) identity.
            Failure(InvalidIdentityError): Input could not be resolved.
        """
        result = resolve_security_identity(identity)
        match result:
            case Success(value=security_identity):
                self.add_security_identity(security_identity)
            case Failure(error=error):
                self._logger.warning(
                    "security_identity_rejected",
                    identity_type=error.identity_type,
                )
        return result

    def reset_security_identities(self) -> "AclManager":
        self._security_identities = []
        return self

    def get_mask_builder(self) -> MaskBuilder:
        """Return a fresh, empty mask builder."""
        return MaskBuilder()

    # =========================================================================
    # ACL operations
    # =========================================================================

    def load_acl(self) -> Result[Acl, AclError]:
        """Load (or create) the ACL of the bound entity.

        Returns:
            Success(Acl): Loaded ACL, also kept as the session ACL.
            Failure(NoContextEntityError): No entity bound.
            Failure(AclError): Provisioning failure.
        """
        if self._context_entity is None:
            return self._no_context_entity("load_acl")

        result = self._provisioner.load_or_create(self._context_entity)
        if isinstance(result, Success):
            self._acl = result.value
        return result

    def install_default_access(self) -> Result[Acl, AclError]:
        """Install the default class-level grants on the bound entity's ACL.

        Loads a fresh copy of the ACL, applies every rule of
        default_access_policy as a class-scoped grant, and keeps the
        result as the session ACL. The session identities are not used.

        Returns:
            Success(Acl): ACL carrying the default grants.
            Failure(NoContextEntityError): No entity bound.
            Failure(AclError): Provisioning or persistence failure.
        """
        if self._context_entity is None:
            return self._no_context_entity("install_default_access")

        load_result = self._provisioner.load_or_create(self._context_entity)
        if isinstance(load_result, Failure):
            return load_result
        acl = load_result.value

        for rule in self.default_access_policy:
            result = self._reconciler.reconcile(
                AceScope.CLASS,
                acl,
                SecurityIdentity.for_role(rule.role),
                rule.mask,
                granting=True,
                index=self.insert_index,
            )
            if isinstance(result, Failure):
                return result

        self._acl = acl
        self._logger.info(
            "default_access_installed",
            object_identity=str(acl.object_identity),
            rules=len(self.default_access_policy),
        )
        return Success(value=acl)

    def set_object_permission(
        self, mask: int, granting: bool = True
    ) -> Result[None, AclError]:
        """Set the current identity's object-scoped permission.

        Returns:
            Success(None): Permission set and persisted.
            Failure(AclNotLoadedError | NoIdentitySetError): Session not ready.
            Failure(AclError): Reconciliation failure.
        """
        return self._set_permission(AceScope.OBJECT, mask, granting)

    def set_class_permission(
        self, mask: int, granting: bool = True
    ) -> Result[None, AclError]:
        """Set the current identity's class-scoped permission.

        Returns:
            Success(None): Permission set and persisted.
            Failure(AclNotLoadedError | NoIdentitySetError): Session not ready.
            Failure(AclError): Reconciliation failure.
        """
        return self._set_permission(AceScope.CLASS, mask, granting)

    def _set_permission(
        self, scope: AceScope, mask: int, granting: bool
    ) -> Result[None, AclError]:
        if self._acl is None:
            self._logger.warning("acl_not_loaded", operation=f"set_{scope.value}_permission")
            return Failure(
                error=AclNotLoadedError(
                    code=ErrorCode.ACL_NOT_LOADED,
                    message="No ACL loaded; call load_acl() first",
                )
            )

        security_identity = self.security_identity
        if security_identity is None:
            self._logger.warning(
                "security_identity_missing", operation=f"set_{scope.value}_permission"
            )
            return Failure(
                error=NoIdentitySetError(
                    code=ErrorCode.NO_SECURITY_IDENTITY,
                    message="No security identity set; add one first",
                )
            )

        return self._reconciler.reconcile(
            scope,
            self._acl,
            security_identity,
            mask,
            granting=granting,
            index=self.insert_index,
        )

    def _no_context_entity(self, operation: str) -> Failure[NoContextEntityError]:
        self._logger.warning("context_entity_missing", operation=operation)
        return Failure(
            error=NoContextEntityError(
                code=ErrorCode.NO_CONTEXT_ENTITY,
                message="No context entity bound; call set_context_entity() first",
            )
        )
