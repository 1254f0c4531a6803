"""Temporary file handling shared by the pipelines and upload client."""

import os

from infrastructure.logging import get_module_logger

logger = get_module_logger()


def remove_file(path: str) -> bool:
    """Delete a temporary file, logging instead of raising on failure.

    Returns:
        True if the file was removed.
    """
    try:
        os.remove(path)
    except (OSError, TypeError) as e:
        logger.warning("temp_file_removal_failed", file_path=str(path), error=str(e))
        return False
    return True
