"""Infrastructure modules for the chat response formatter.

Centralized infrastructure components:
- configuration: Settings management (settings, FormattingSettings)
- logging: Structured logging (get_module_logger, bind_request_context)
- events: In-process event bus
- operations: Operation results
- platforms: Formatting pipelines, registry and service
"""

# Configuration
from infrastructure.configuration import settings

# Logging
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "settings",
    # Logging
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
