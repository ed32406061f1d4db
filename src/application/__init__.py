"""Application layer - ACL use cases and orchestration.

Structure:
- services/: identity resolution, ACL provisioning, permission
  reconciliation, and the AclManager session facade that composes them
"""
