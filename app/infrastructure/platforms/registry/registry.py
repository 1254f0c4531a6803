"""Formatter registry for managing registered pipelines.

Provides thread-safe registration and retrieval of formatting pipelines.
"""

import threading
from typing import Dict, List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.platforms.capabilities.models import PlatformCapability
from infrastructure.platforms.exceptions import (
    FormatterAlreadyRegisteredError,
    FormatterNotFoundError,
)
from infrastructure.platforms.formatters import (
    BaseResponseFormatter,
    MessengerFormatter,
    SlackFormatter,
    TextFormatter,
    WebFormatter,
)

logger = get_module_logger()


class FormatterRegistry:
    """Thread-safe registry for formatting pipelines.

    Pipelines are keyed by their lower-cased platform id, so lookups are
    case-insensitive.

    Attributes:
        _formatters: Dict mapping platform_id to formatter instances.
        _lock: Threading lock for thread-safe operations.
    """

    def __init__(self):
        self._formatters: Dict[str, BaseResponseFormatter] = {}
        self._lock = threading.Lock()

    def register_formatter(self, formatter: BaseResponseFormatter) -> None:
        """Register a pipeline.

        Raises:
            FormatterAlreadyRegisteredError: If the platform id is taken.
        """
        platform_id = formatter.platform_id.lower()

        with self._lock:
            if platform_id in self._formatters:
                raise FormatterAlreadyRegisteredError(
                    f"Formatter '{platform_id}' is already registered"
                )

            self._formatters[platform_id] = formatter
            logger.debug(
                "formatter_registered",
                platform_id=platform_id,
                formatter=formatter.__class__.__name__,
            )

    def get_formatter(self, platform_id: Optional[str]) -> Optional[BaseResponseFormatter]:
        """Get a pipeline by id, or None when it is not registered."""
        if not platform_id:
            return None
        with self._lock:
            return self._formatters.get(platform_id.lower())

    def get_formatter_or_raise(self, platform_id: str) -> BaseResponseFormatter:
        """Get a pipeline by id.

        Raises:
            FormatterNotFoundError: If no pipeline has that id.
        """
        formatter = self.get_formatter(platform_id)
        if formatter is None:
            raise FormatterNotFoundError(f"Formatter '{platform_id}' not found")
        return formatter

    def list_formatters(self) -> List[BaseResponseFormatter]:
        with self._lock:
            return list(self._formatters.values())

    def get_formatters_by_capability(
        self, capability: PlatformCapability
    ) -> List[BaseResponseFormatter]:
        """Get all pipelines that declare a specific capability."""
        with self._lock:
            return [f for f in self._formatters.values() if f.supports(capability)]

    def clear(self) -> None:
        """Clear all registered pipelines. Primarily used for testing."""
        with self._lock:
            self._formatters.clear()
            logger.debug("formatter_registry_cleared")

    def count(self) -> int:
        with self._lock:
            return len(self._formatters)

    def has_formatter(self, platform_id: str) -> bool:
        with self._lock:
            return platform_id.lower() in self._formatters


def build_default_registry() -> FormatterRegistry:
    """Create a registry holding the slack, fb, text and web pipelines."""
    registry = FormatterRegistry()
    for formatter in (
        SlackFormatter(),
        MessengerFormatter(),
        TextFormatter(),
        WebFormatter(),
    ):
        registry.register_formatter(formatter)
    return registry


# Global registry instance
_global_registry: Optional[FormatterRegistry] = None
_global_registry_lock = threading.Lock()


def get_formatter_registry() -> FormatterRegistry:
    """Get the global formatter registry singleton.

    Thread-safe singleton pattern. Creates the registry on first call.
    """
    global _global_registry

    if _global_registry is None:
        with _global_registry_lock:
            # Double-check locking pattern
            if _global_registry is None:
                _global_registry = build_default_registry()
                logger.debug("global_formatter_registry_initialized")

    return _global_registry
