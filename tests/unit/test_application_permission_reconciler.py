"""Unit tests for PermissionReconciler.

Covers:
- Insert for a new identity
- In-place update (single update, no insert)
- Polarity flip (opposite entry deleted, new entry inserted)
- Reverse-order safety with several matching entries
- Unconditional persistence
- Insert position clamping, negative index and negative mask rejection
- Rollback on rejected insert and on persist failure

Reference:
    - src/application/services/permission_reconciler.py
"""

from collections import Counter
from unittest.mock import MagicMock

import pytest

from src.application.services import PermissionReconciler
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities import Acl
from src.domain.enums import AceScope
from src.domain.errors import AclStorageError, InvalidEntryIndexError, InvalidMaskError
from src.domain.value_objects import ObjectIdentity, SecurityIdentity
from tests.fixtures.acl_fixtures import ADMINS, ALICE, BOB, CAROL, entry_tuples


@pytest.fixture
def acl(provider) -> Acl:
    """ACL created in the in-memory provider."""
    result = provider.create_acl(make_oid())
    assert isinstance(result, Success)
    return result.value


@pytest.fixture
def reconciler(provider, mock_logger) -> PermissionReconciler:
    return PermissionReconciler(provider=provider, logger=mock_logger)


def make_oid() -> ObjectIdentity:
    return ObjectIdentity(identifier="42", type="tests.Post")


def stored_tuples(provider, scope: AceScope) -> list[tuple[str, int, bool]]:
    result = provider.find_acl(make_oid())
    assert isinstance(result, Success)
    return entry_tuples(result.value, scope)


def assert_unique(acl: Acl, scope: AceScope) -> None:
    counts = Counter(
        (entry.security_identity, entry.granting) for entry in acl.get_entries(scope)
    )
    assert all(count == 1 for count in counts.values()), counts


@pytest.mark.unit
class TestReconcileInsert:
    """Identity has no entry yet."""

    def test_inserts_grant(self, reconciler, acl, provider):
        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 5)

        assert result == Success(value=None)
        assert entry_tuples(acl, AceScope.OBJECT) == [("principal:alice", 5, True)]
        assert stored_tuples(provider, AceScope.OBJECT) == [
            ("principal:alice", 5, True)
        ]
        assert acl.class_entries == []

    def test_inserts_deny(self, reconciler, acl):
        reconciler.reconcile(AceScope.CLASS, acl, ADMINS, 8, granting=False)

        assert entry_tuples(acl, AceScope.CLASS) == [("role:ROLE_ADMIN", 8, False)]

    def test_inserts_at_index(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, BOB, 1)
        acl.insert_entry(AceScope.OBJECT, CAROL, 1, index=1)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 4, index=1)

        assert [e[0] for e in entry_tuples(acl, AceScope.OBJECT)] == [
            "principal:bob",
            "principal:alice",
            "principal:carol",
        ]

    def test_other_identities_untouched(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, BOB, 1)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 4)

        assert ("principal:bob", 1, True) in entry_tuples(acl, AceScope.OBJECT)


@pytest.mark.unit
class TestReconcileUpdate:
    """Identity already holds an entry of the requested polarity."""

    def test_updates_mask_in_place(self, reconciler, acl, mock_logger):
        acl.insert_entry(AceScope.OBJECT, BOB, 1)
        acl.insert_entry(AceScope.OBJECT, ALICE, 1, index=1)
        original_id = acl.object_entries[1].id

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 7)

        assert entry_tuples(acl, AceScope.OBJECT) == [
            ("principal:bob", 1, True),
            ("principal:alice", 7, True),
        ]
        assert acl.object_entries[1].id == original_id
        updated = [
            c for c in mock_logger.debug.call_args_list if c[0][0] == "acl_entry_updated"
        ]
        inserted = [
            c
            for c in mock_logger.debug.call_args_list
            if c[0][0] == "acl_entry_inserted"
        ]
        assert len(updated) == 1
        assert inserted == []

    def test_last_mask_wins(self, reconciler, acl, provider):
        for mask in (1, 4, 2):
            reconciler.reconcile(AceScope.OBJECT, acl, ALICE, mask)

        assert entry_tuples(acl, AceScope.OBJECT) == [("principal:alice", 2, True)]
        assert stored_tuples(provider, AceScope.OBJECT) == [
            ("principal:alice", 2, True)
        ]

    def test_matches_identity_by_value(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, SecurityIdentity.for_principal("alice"), 1)

        reconciler.reconcile(
            AceScope.OBJECT, acl, SecurityIdentity.for_principal("alice"), 2
        )

        assert entry_tuples(acl, AceScope.OBJECT) == [("principal:alice", 2, True)]

    def test_role_and_principal_with_same_key_are_distinct(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, SecurityIdentity.for_role("alice"), 1)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 2)

        assert len(acl.object_entries) == 2

    def test_existing_duplicates_are_each_updated(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1)
        acl.insert_entry(AceScope.OBJECT, ALICE, 2, index=1)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 9)

        assert entry_tuples(acl, AceScope.OBJECT) == [
            ("principal:alice", 9, True),
            ("principal:alice", 9, True),
        ]


@pytest.mark.unit
class TestReconcilePolarity:
    """Identity holds an entry of the opposite polarity."""

    def test_grant_replaces_deny(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 4, granting=False)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 4, granting=True)

        assert entry_tuples(acl, AceScope.OBJECT) == [("principal:alice", 4, True)]

    def test_deny_replaces_grant(self, reconciler, acl):
        acl.insert_entry(AceScope.CLASS, ALICE, 4)

        reconciler.reconcile(AceScope.CLASS, acl, ALICE, 4, granting=False)

        assert entry_tuples(acl, AceScope.CLASS) == [("principal:alice", 4, False)]

    def test_grant_and_deny_pair_collapses_to_one_entry(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1)
        acl.insert_entry(AceScope.OBJECT, ALICE, 2, index=1, granting=False)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 6)

        assert entry_tuples(acl, AceScope.OBJECT) == [("principal:alice", 6, True)]
        assert_unique(acl, AceScope.OBJECT)

    def test_reverse_walk_with_interleaved_matches(self, reconciler, acl):
        """Deleting while walking never skips or misindexes an entry."""
        acl.insert_entry(AceScope.OBJECT, BOB, 1, index=0)
        acl.insert_entry(AceScope.OBJECT, ALICE, 2, index=1, granting=False)
        acl.insert_entry(AceScope.OBJECT, CAROL, 4, index=2)
        acl.insert_entry(AceScope.OBJECT, ALICE, 8, index=3)
        acl.insert_entry(AceScope.OBJECT, ADMINS, 16, index=4)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 32, granting=True)

        assert entry_tuples(acl, AceScope.OBJECT) == [
            ("principal:bob", 1, True),
            ("principal:carol", 4, True),
            ("principal:alice", 32, True),
            ("role:ROLE_ADMIN", 16, True),
        ]
        assert_unique(acl, AceScope.OBJECT)

    def test_reverse_walk_deletes_every_opposite_entry(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1, granting=False)
        acl.insert_entry(AceScope.OBJECT, BOB, 1, index=1)
        acl.insert_entry(AceScope.OBJECT, ALICE, 2, index=2, granting=False)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 4)

        assert entry_tuples(acl, AceScope.OBJECT) == [
            ("principal:alice", 4, True),
            ("principal:bob", 1, True),
        ]

    def test_scopes_are_independent(self, reconciler, acl):
        acl.insert_entry(AceScope.CLASS, ALICE, 1, granting=False)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1)

        assert entry_tuples(acl, AceScope.CLASS) == [("principal:alice", 1, False)]
        assert entry_tuples(acl, AceScope.OBJECT) == [("principal:alice", 1, True)]


@pytest.mark.unit
class TestReconcilePersistence:
    """Persistence through the provider."""

    def test_persists_once_per_call(self, reconciler, acl, provider):
        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1)
        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1)

        assert provider.update_count == 2

    def test_persists_on_pure_update(self, mock_logger, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1)
        mock_provider = MagicMock()
        mock_provider.update_acl.return_value = Success(value=None)
        reconciler = PermissionReconciler(provider=mock_provider, logger=mock_logger)

        reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 2)

        mock_provider.update_acl.assert_called_once_with(acl)

    def test_persist_failure_restores_entries(self, mock_logger, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1, granting=False)
        acl.insert_entry(AceScope.OBJECT, BOB, 1, index=1)
        before = entry_tuples(acl, AceScope.OBJECT)
        error = AclStorageError(code=ErrorCode.ACL_STORAGE_FAILED, message="disk full")
        mock_provider = MagicMock()
        mock_provider.update_acl.return_value = Failure(error=error)
        reconciler = PermissionReconciler(provider=mock_provider, logger=mock_logger)

        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 2)

        assert result == Failure(error=error)
        assert entry_tuples(acl, AceScope.OBJECT) == before
        assert mock_logger.error.call_args[0][0] == "acl_persist_failed"


@pytest.mark.unit
class TestReconcileInsertPosition:
    """Insert position handling."""

    def test_index_past_end_appends(self, reconciler, acl, provider):
        acl.insert_entry(AceScope.OBJECT, BOB, 1)

        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1, index=3)

        assert result == Success(value=None)
        assert [e[0] for e in entry_tuples(acl, AceScope.OBJECT)] == [
            "principal:bob",
            "principal:alice",
        ]
        assert provider.update_count == 1

    def test_index_past_end_on_empty_scope(self, reconciler, acl):
        result = reconciler.reconcile(AceScope.CLASS, acl, ADMINS, 64, index=1)

        assert result == Success(value=None)
        assert entry_tuples(acl, AceScope.CLASS) == [("role:ROLE_ADMIN", 64, True)]

    def test_index_clamped_after_deletes(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1, granting=False)
        acl.insert_entry(AceScope.OBJECT, BOB, 1, index=1)

        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1, index=2)

        assert result == Success(value=None)
        assert entry_tuples(acl, AceScope.OBJECT) == [
            ("principal:bob", 1, True),
            ("principal:alice", 1, True),
        ]

    def test_index_at_end_accepted(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, BOB, 1)

        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1, index=1)

        assert result == Success(value=None)
        assert entry_tuples(acl, AceScope.OBJECT)[1][0] == "principal:alice"

    def test_negative_index_rejected(self, reconciler, acl, provider):
        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1, index=-1)

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidEntryIndexError)
        assert result.error.code == ErrorCode.INVALID_ENTRY_INDEX
        assert result.error.scope == "object"
        assert result.error.index == -1
        assert provider.update_count == 0

    def test_rejected_insert_restores_deleted_entries(self, reconciler, acl):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1, granting=False)
        acl.insert_entry(AceScope.OBJECT, BOB, 1, index=1)
        before = entry_tuples(acl, AceScope.OBJECT)

        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, 1, index=-1)

        assert isinstance(result, Failure)
        assert entry_tuples(acl, AceScope.OBJECT) == before


@pytest.mark.unit
class TestReconcileInvalidMask:
    """Negative masks never reach the ACL."""

    def test_negative_mask_leaves_entries_untouched(self, reconciler, acl, provider):
        acl.insert_entry(AceScope.OBJECT, ALICE, 1)
        acl.insert_entry(AceScope.OBJECT, BOB, 1, index=1)
        acl.insert_entry(AceScope.OBJECT, ALICE, 2, index=2, granting=False)
        before = entry_tuples(acl, AceScope.OBJECT)

        result = reconciler.reconcile(AceScope.OBJECT, acl, ALICE, -1)

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidMaskError)
        assert result.error.code == ErrorCode.INVALID_MASK
        assert result.error.mask == -1
        assert entry_tuples(acl, AceScope.OBJECT) == before
        assert provider.update_count == 0

    def test_negative_mask_on_empty_scope(self, reconciler, acl, mock_logger):
        result = reconciler.reconcile(AceScope.CLASS, acl, ADMINS, -8)

        assert isinstance(result, Failure)
        assert acl.class_entries == []
        assert mock_logger.warning.call_args[0][0] == "acl_mask_rejected"
