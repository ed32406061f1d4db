"""Permission reconciliation service.

Applies one (identity, mask, polarity) permission to an ACL scope so that
the identity ends up with exactly one entry of that polarity, then persists
the ACL.

Algorithm:
    1. Reject a negative mask before touching the ACL.
    2. Snapshot the scope's entries.
    3. Walk the entries from the last index down to 0. Deleting entry i
       only shifts entries after i, which the walk has already visited.
    4. For every entry belonging to the identity (value equality):
       - same polarity: update its mask in place
       - opposite polarity: delete it
    5. Insert a new entry when no same-polarity entry was updated. An index
       past the end of the (post-walk) list appends; a negative index is
       rejected.
    6. Persist through the provider, once per call, even when nothing was
       inserted.

Failure Handling:
    A rejected mask leaves the ACL untouched. A failed insert or persist
    restores the snapshot, so the in-memory ACL never diverges from what the provider stored.

Concurrency:
    No locking. At most one reconciliation per ACL at a time is a caller
    contract; providers serialize concurrent writers if they allow them.
"""

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities import Acl
from src.domain.enums import AceScope
from src.domain.errors import AclError, InvalidEntryIndexError, InvalidMaskError
from src.domain.protocols import AclProviderProtocol, LoggerProtocol
from src.domain.value_objects import SecurityIdentity


class PermissionReconciler:
    """Reconcile ACL entries for one identity and persist the ACL.

    Dependencies (injected via constructor):
        - AclProviderProtocol: ACL persistence
        - LoggerProtocol: Structured logging

    Example:
        >>> reconciler = PermissionReconciler(provider=provider, logger=logger)
        >>> reconciler.reconcile(
        ...     AceScope.OBJECT,
        ...     acl,
        ...     SecurityIdentity.for_principal("alice"),
        ...     build_mask("edit", "view"),
        ... )
        Success(value=None)
    """

    def __init__(
        self,
        provider: AclProviderProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize reconciler with dependencies.

        Args:
            provider: ACL storage provider (update_acl is called per reconcile).
            logger: Structured logger.
        """
        self._provider = provider
        self._logger = logger

    def reconcile(
        self,
        scope: AceScope,
        acl: Acl,
        security_identity: SecurityIdentity,
        mask: int,
        granting: bool = True,
        index: int = 0,
    ) -> Result[None, AclError]:
        """Set the identity's permission in one scope of the ACL.

        Args:
            scope: CLASS or OBJECT entries.
            acl: ACL to mutate and persist.
            security_identity: Identity the permission applies to.
            mask: Permission mask to set.
            granting: True for a grant entry, False for a deny entry.
            index: Preferred position of a newly inserted entry; clamped to
                the end of the list.

        Returns:
            Success(None): ACL reconciled and persisted.
            Failure(InvalidMaskError): mask is negative.
            Failure(InvalidEntryIndexError): index is negative.
            Failure(AclStorageError): Provider failed to persist.

        Note:
            Pre-existing duplicate same-polarity entries are each updated to
            the new mask; they are not merged.
        """
        log = self._logger.bind(
            acl_id=str(acl.id),
            scope=scope.value,
            security_identity=str(security_identity),
            granting=granting,
        )
        if mask < 0:
            log.warning("acl_mask_rejected", mask=mask)
            return Failure(
                error=InvalidMaskError(
                    code=ErrorCode.INVALID_MASK,
                    message=f"Permission mask cannot be negative: {mask}",
                    mask=mask,
                )
            )

        snapshot = acl.get_entries(scope)

        found = False
        for i in range(len(snapshot) - 1, -1, -1):
            entry = snapshot[i]
            if not entry.belongs_to(security_identity):
                continue
            if entry.granting == granting:
                acl.update_entry(scope, i, mask)
                found = True
                log.debug("acl_entry_updated", index=i, mask=mask)
            else:
                acl.delete_entry(scope, i)
                log.debug("acl_entry_deleted", index=i)

        if not found:
            position = min(index, len(acl.get_entries(scope)))
            try:
                acl.insert_entry(scope, security_identity, mask, position, granting)
            except IndexError as e:
                acl.replace_entries(scope, snapshot)
                log.warning("acl_entry_insert_rejected", index=index, reason=str(e))
                return Failure(
                    error=InvalidEntryIndexError(
                        code=ErrorCode.INVALID_ENTRY_INDEX,
                        message=str(e),
                        scope=scope.value,
                        index=index,
                    )
                )
            log.debug("acl_entry_inserted", index=position, mask=mask)

        match self._provider.update_acl(acl):
            case Failure(error=error):
                acl.replace_entries(scope, snapshot)
                log.error(
                    "acl_persist_failed",
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Failure(error=error)
            case _:
                return Success(value=None)
