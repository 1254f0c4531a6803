"""Operation result types and status enums.

Standardized outcome types for side-effecting collaborators such as the
file upload client.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
