"""Unit tests for AclManager.

Covers:
- Session preconditions (entity, ACL, identity)
- Identity handling (create, add, reset, current identity)
- Object/class permission setters
- Default access installation

Reference:
    - src/application/services/acl_manager.py
"""

from unittest.mock import MagicMock

import pytest

from src.application.services import (
    DEFAULT_ACCESS_POLICY,
    AclManager,
    DefaultAccessRule,
    MaskBuilder,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import AceScope, Permission
from src.domain.errors import (
    AclNotLoadedError,
    AclStorageError,
    InvalidIdentityError,
    NoContextEntityError,
    NoIdentitySetError,
)
from src.domain.value_objects import ObjectIdentity, SecurityIdentity
from tests.fixtures.acl_fixtures import (
    ALICE,
    BOB,
    Post,
    Token,
    User,
    entry_tuples,
    make_acl,
)


@pytest.fixture
def manager(provider, mock_logger) -> AclManager:
    return AclManager(provider=provider, logger=mock_logger)


def stored_acl(provider, entity):
    result = provider.find_acl(ObjectIdentity.from_domain_object(entity))
    assert isinstance(result, Success)
    return result.value


@pytest.mark.unit
class TestSessionState:
    """Entity binding and ACL loading."""

    def test_new_manager_is_empty(self, manager):
        assert manager.context_entity is None
        assert manager.acl is None
        assert not manager.is_acl_loaded()
        assert not manager.has_security_identity()
        assert manager.security_identity is None

    def test_load_acl_without_entity_fails(self, manager, provider):
        result = manager.load_acl()

        assert isinstance(result, Failure)
        assert isinstance(result.error, NoContextEntityError)
        assert result.error.code == ErrorCode.NO_CONTEXT_ENTITY
        assert len(provider) == 0

    def test_load_acl(self, manager):
        post = Post(id=1)

        result = manager.set_context_entity(post).load_acl()

        assert isinstance(result, Success)
        assert manager.is_acl_loaded()
        assert manager.acl is result.value
        assert manager.context_entity is post

    def test_load_acl_invalid_entity(self, manager):
        result = manager.set_context_entity(Post(id=None)).load_acl()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_DOMAIN_OBJECT
        assert not manager.is_acl_loaded()

    def test_rebinding_other_entity_drops_acl(self, manager):
        manager.set_context_entity(Post(id=1)).load_acl()

        manager.set_context_entity(Post(id=2))

        assert not manager.is_acl_loaded()

    def test_rebinding_same_entity_keeps_acl(self, manager):
        post = Post(id=1)
        manager.set_context_entity(post).load_acl()

        manager.set_context_entity(post)

        assert manager.is_acl_loaded()


@pytest.mark.unit
class TestSecurityIdentities:
    """Identity collection of the session."""

    def test_create_security_identity_adds(self, manager):
        result = manager.create_security_identity(User(account_key="alice"))

        assert result == Success(value=ALICE)
        assert manager.has_security_identity()
        assert manager.security_identities == [ALICE]

    def test_create_from_role_name(self, manager):
        manager.create_security_identity("ROLE_ADMIN")

        assert manager.security_identity == SecurityIdentity.for_role("ROLE_ADMIN")

    def test_invalid_identity_not_added(self, manager, mock_logger):
        result = manager.create_security_identity(12)

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidIdentityError)
        assert not manager.has_security_identity()
        assert mock_logger.warning.call_args[0][0] == "security_identity_rejected"

    def test_current_identity_is_first_added(self, manager):
        manager.add_security_identity(ALICE).add_security_identity(BOB)

        assert manager.security_identity == ALICE

    def test_reset(self, manager):
        manager.add_security_identity(ALICE)

        manager.reset_security_identities()

        assert not manager.has_security_identity()

    def test_security_identities_is_a_copy(self, manager):
        manager.add_security_identity(ALICE)

        manager.security_identities.append(BOB)

        assert manager.security_identities == [ALICE]

    def test_mask_builder_is_fresh(self, manager):
        first = manager.get_mask_builder()
        first.add("view")

        second = manager.get_mask_builder()

        assert isinstance(second, MaskBuilder)
        assert second is not first
        assert second.get() == 0


@pytest.mark.unit
class TestSetPermission:
    """Object and class permission setters."""

    def test_object_permission_requires_acl(self, manager):
        manager.add_security_identity(ALICE)

        result = manager.set_object_permission(1)

        assert isinstance(result, Failure)
        assert isinstance(result.error, AclNotLoadedError)
        assert result.error.code == ErrorCode.ACL_NOT_LOADED

    def test_class_permission_requires_identity(self, manager):
        manager.set_context_entity(Post(id=1)).load_acl()

        result = manager.set_class_permission(1)

        assert isinstance(result, Failure)
        assert isinstance(result.error, NoIdentitySetError)
        assert result.error.code == ErrorCode.NO_SECURITY_IDENTITY

    def test_set_object_permission(self, manager, provider):
        post = Post(id=1)
        manager.set_context_entity(post).load_acl()
        manager.create_security_identity(Token(principal=User(account_key="alice")))
        mask = manager.get_mask_builder().add("edit").add("view").get()

        result = manager.set_object_permission(mask)

        assert result == Success(value=None)
        assert entry_tuples(manager.acl, AceScope.OBJECT) == [
            ("principal:alice", 5, True)
        ]
        assert entry_tuples(stored_acl(provider, post), AceScope.OBJECT) == [
            ("principal:alice", 5, True)
        ]

    def test_set_class_permission_deny(self, manager, provider):
        post = Post(id=1)
        manager.set_context_entity(post).load_acl()
        manager.create_security_identity("ROLE_USER")

        manager.set_class_permission(Permission.DELETE, granting=False)

        assert entry_tuples(stored_acl(provider, post), AceScope.CLASS) == [
            ("role:ROLE_USER", 8, False)
        ]

    def test_only_current_identity_is_used(self, manager):
        manager.set_context_entity(Post(id=1)).load_acl()
        manager.add_security_identity(ALICE).add_security_identity(BOB)

        manager.set_object_permission(1)

        assert entry_tuples(manager.acl, AceScope.OBJECT) == [
            ("principal:alice", 1, True)
        ]

    def test_flip_polarity(self, manager):
        manager.set_context_entity(Post(id=1)).load_acl()
        manager.add_security_identity(ALICE)

        manager.set_object_permission(4, granting=False)
        manager.set_object_permission(4, granting=True)

        assert entry_tuples(manager.acl, AceScope.OBJECT) == [
            ("principal:alice", 4, True)
        ]

    def test_insert_index_past_end_appends(self, provider, mock_logger):
        manager = AclManager(provider=provider, logger=mock_logger, insert_index=5)
        manager.set_context_entity(Post(id=1)).load_acl()
        manager.add_security_identity(ALICE)

        assert manager.set_object_permission(1) == Success(value=None)

        manager.reset_security_identities().add_security_identity(BOB)
        assert manager.set_object_permission(2) == Success(value=None)

        assert entry_tuples(manager.acl, AceScope.OBJECT) == [
            ("principal:alice", 1, True),
            ("principal:bob", 2, True),
        ]

    def test_negative_mask_rejected(self, manager):
        manager.set_context_entity(Post(id=1)).load_acl()
        manager.add_security_identity(ALICE)

        result = manager.set_object_permission(-1)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_MASK
        assert manager.acl.object_entries == []


@pytest.mark.unit
class TestInstallDefaultAccess:
    """Default class-level grants."""

    def test_requires_entity(self, manager):
        result = manager.install_default_access()

        assert isinstance(result, Failure)
        assert isinstance(result.error, NoContextEntityError)

    def test_installs_four_class_grants(self, manager, provider):
        post = Post(id=1)

        result = manager.set_context_entity(post).install_default_access()

        assert isinstance(result, Success)
        expected = [
            ("role:ROLE_SUPER_ADMIN", 1073741823, True),
            ("role:ROLE_ADMIN", 64, True),
            ("role:IS_AUTHENTICATED_ANONYMOUSLY", 1, True),
            ("role:ROLE_USER", 3, True),
        ]
        stored = stored_acl(provider, post)
        assert sorted(entry_tuples(stored, AceScope.CLASS)) == sorted(expected)
        assert stored.object_entries == []
        assert manager.acl is result.value

    def test_installs_with_nonzero_insert_index(self, provider, mock_logger):
        manager = AclManager(provider=provider, logger=mock_logger, insert_index=1)
        post = Post(id=1)

        result = manager.set_context_entity(post).install_default_access()

        assert isinstance(result, Success)
        stored = stored_acl(provider, post)
        assert [e[0] for e in entry_tuples(stored, AceScope.CLASS)] == [
            "role:ROLE_SUPER_ADMIN",
            "role:ROLE_USER",
            "role:IS_AUTHENTICATED_ANONYMOUSLY",
            "role:ROLE_ADMIN",
        ]

    def test_reinstall_does_not_duplicate(self, manager, provider):
        post = Post(id=1)
        manager.set_context_entity(post)

        manager.install_default_access()
        manager.install_default_access()

        assert len(stored_acl(provider, post).class_entries) == 4

    def test_ignores_session_identities(self, manager, provider):
        post = Post(id=1)
        manager.set_context_entity(post).add_security_identity(ALICE)

        manager.install_default_access()

        identities = [e[0] for e in entry_tuples(stored_acl(provider, post), AceScope.CLASS)]
        assert "principal:alice" not in identities

    def test_custom_policy(self, provider, mock_logger):
        policy = (DefaultAccessRule(role="ROLE_EDITOR", permissions=("edit", "view")),)
        manager = AclManager(
            provider=provider, logger=mock_logger, default_access_policy=policy
        )
        post = Post(id=1)

        manager.set_context_entity(post).install_default_access()

        assert entry_tuples(stored_acl(provider, post), AceScope.CLASS) == [
            ("role:ROLE_EDITOR", 5, True)
        ]

    def test_default_policy_masks(self):
        assert [rule.mask for rule in DEFAULT_ACCESS_POLICY] == [
            1073741823,
            64,
            1,
            3,
        ]

    def test_persist_failure_propagates(self, mock_logger):
        error = AclStorageError(code=ErrorCode.ACL_STORAGE_FAILED, message="boom")
        mock_provider = MagicMock()
        mock_provider.create_acl.return_value = Success(value=make_acl())
        mock_provider.update_acl.return_value = Failure(error=error)
        manager = AclManager(provider=mock_provider, logger=mock_logger)

        result = manager.set_context_entity(Post(id=1)).install_default_access()

        assert result == Failure(error=error)
        assert not manager.is_acl_loaded()
        mock_provider.update_acl.assert_called_once()
