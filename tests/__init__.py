"""Test suite for the ACL manager.

Test structure:
- unit/: Domain, application and adapter logic in isolation
- integration/: SQLAlchemy ACL provider against SQLite
- fixtures/: Host-application stand-ins (entities, users, tokens, roles)
"""
