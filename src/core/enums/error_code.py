"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Precondition errors (manager session state)
- Storage errors (*_STORAGE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_IDENTITY = "invalid_identity"
    INVALID_DOMAIN_OBJECT = "invalid_domain_object"
    INVALID_ENTRY_INDEX = "invalid_entry_index"
    INVALID_MASK = "invalid_mask"

    # Resource errors
    ACL_NOT_FOUND = "acl_not_found"

    # Conflict errors
    ACL_ALREADY_EXISTS = "acl_already_exists"

    # Precondition errors
    NO_CONTEXT_ENTITY = "no_context_entity"
    ACL_NOT_LOADED = "acl_not_loaded"
    NO_SECURITY_IDENTITY = "no_security_identity"

    # Storage errors
    ACL_STORAGE_FAILED = "acl_storage_failed"
