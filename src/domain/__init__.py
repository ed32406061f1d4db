"""Domain layer - Pure ACL model.

Contains the ACL entities, value objects, protocols (ports) and errors.
The domain layer has NO dependencies on any framework or infrastructure.

Structure:
- entities/: Acl and Entry (ACE)
- value_objects/: SecurityIdentity, ObjectIdentity, Role
- enums/: AceScope, Permission, SecurityIdentityKind, SystemRole
- protocols/: ACL provider, identity sources, mask builder, logger
- errors/: ACL error types returned in Failure results
"""
