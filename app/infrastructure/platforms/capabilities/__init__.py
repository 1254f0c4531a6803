"""Platform capability declarations and models."""

from infrastructure.platforms.capabilities.models import (
    PLATFORM_MESSENGER,
    PLATFORM_SLACK,
    PLATFORM_TEXT,
    PLATFORM_WEB,
    CapabilityDeclaration,
    PlatformCapability,
    create_capability_declaration,
)

__all__ = [
    "PlatformCapability",
    "CapabilityDeclaration",
    "create_capability_declaration",
    "PLATFORM_SLACK",
    "PLATFORM_MESSENGER",
    "PLATFORM_TEXT",
    "PLATFORM_WEB",
]
