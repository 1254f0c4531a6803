"""Formatter registry for managing the pipeline implementations."""

from infrastructure.platforms.registry.registry import (
    FormatterRegistry,
    build_default_registry,
    get_formatter_registry,
)

__all__ = [
    "FormatterRegistry",
    "build_default_registry",
    "get_formatter_registry",
]
