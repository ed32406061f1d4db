"""Domain protocols (ports) package.

Infrastructure adapters and host applications implement these protocols
structurally, without inheritance.

Usage:
    from src.domain.protocols import AclProviderProtocol, Principal
"""

from src.domain.protocols.acl_provider_protocol import AclProviderProtocol
from src.domain.protocols.identity_source_protocol import (
    AuthToken,
    DomainObject,
    Principal,
    RoleValue,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.mask_builder_protocol import MaskBuilderProtocol

__all__ = [
    # Storage
    "AclProviderProtocol",
    # Identity sources
    "AuthToken",
    "DomainObject",
    "Principal",
    "RoleValue",
    # Services
    "LoggerProtocol",
    "MaskBuilderProtocol",
]
