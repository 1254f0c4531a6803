"""Platform capability models and declarations.

Defines the capabilities a formatting pipeline can support, and the frozen
declaration each pipeline publishes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional


class PlatformCapability(str, Enum):
    """Capabilities that a chat surface can support."""

    MESSAGING = "messaging"  # Plain text replies
    RICH_TEXT = "rich_text"  # Bold/italic/quote markup survives delivery
    HTML = "html"  # Output is an HTML document fragment
    INTERACTIVE_CARDS = "interactive_cards"  # Structured cards/attachments
    FILE_SHARING = "file_sharing"  # Upload local files to the channel
    IMPLICIT_ADDRESSING = "implicit_addressing"  # Every inbound text targets the bot


# Pipeline identifier constants
PLATFORM_SLACK = "slack"
PLATFORM_MESSENGER = "fb"
PLATFORM_TEXT = "text"
PLATFORM_WEB = "web"


@dataclass(frozen=True)
class CapabilityDeclaration:
    """Declares the capabilities supported by a formatting pipeline.

    Attributes:
        platform_id: Pipeline id (slack, fb, text, web).
        capabilities: Set of PlatformCapability values this pipeline supports.
        metadata: Optional additional metadata about the pipeline.
    """

    platform_id: str
    capabilities: FrozenSet[PlatformCapability]
    metadata: Dict[str, str] = field(default_factory=dict)

    def supports(self, capability: PlatformCapability) -> bool:
        """Check if this pipeline supports the given capability."""
        return capability in self.capabilities

    def supports_all(self, *capabilities: PlatformCapability) -> bool:
        """Check if this pipeline supports all given capabilities."""
        return all(cap in self.capabilities for cap in capabilities)


def create_capability_declaration(
    platform_id: str,
    *capabilities: PlatformCapability,
    metadata: Optional[Dict[str, str]] = None,
) -> CapabilityDeclaration:
    """Factory function for creating CapabilityDeclaration instances.

    Example:
        >>> decl = create_capability_declaration(
        ...     PLATFORM_SLACK,
        ...     PlatformCapability.MESSAGING,
        ...     PlatformCapability.FILE_SHARING,
        ... )
    """
    return CapabilityDeclaration(
        platform_id=platform_id,
        capabilities=frozenset(capabilities),
        metadata=metadata or {},
    )
