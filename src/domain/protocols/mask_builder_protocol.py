"""Mask builder protocol.

Accumulates named permission bits into an integer mask.
"""

from typing import Protocol

from src.domain.enums import Permission


class MaskBuilderProtocol(Protocol):
    """Permission mask accumulator (reset/add/get)."""

    def reset(self) -> "MaskBuilderProtocol":
        """Clear all accumulated bits."""
        ...

    def add(self, permission: "str | Permission | int") -> "MaskBuilderProtocol":
        """Add a permission by name, Permission member or raw bits."""
        ...

    def get(self) -> int:
        """Return the accumulated mask."""
        ...
