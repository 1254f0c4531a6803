"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.formatting import FormattingSettings

__all__ = [
    "FormattingSettings",
]
