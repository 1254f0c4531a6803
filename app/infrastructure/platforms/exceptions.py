"""Custom exceptions for the formatting platforms.

Provides specialized exceptions for pipeline lookup, capability checks and
malformed response descriptions.
"""


class PlatformError(Exception):
    """Base exception for all platform-related errors.

    Example:
        try:
            formatter.deliver(request, context)
        except PlatformError as e:
            logger.error("platform_error", error=str(e))
    """

    pass


class FormatterNotFoundError(PlatformError):
    """Raised when a pipeline id is not registered.

    Example:
        >>> registry.get_formatter_or_raise("irc")
        Traceback (most recent call last):
        ...
        FormatterNotFoundError: Formatter 'irc' not found
    """

    pass


class FormatterAlreadyRegisteredError(PlatformError):
    """Raised when attempting to register a pipeline with a duplicate id."""

    pass


class CapabilityNotSupportedError(PlatformError):
    """Raised when a pipeline does not support a required capability.

    Example:
        >>> formatter.require_capability(PlatformCapability.FILE_SHARING)
        Traceback (most recent call last):
        ...
        CapabilityNotSupportedError: Pipeline fb does not support file_sharing
    """

    pass


class InvalidMessageFormatError(PlatformError):
    """Raised when a response description cannot be read.

    Example:
        >>> FormatterRequest.from_payload({"attachments": "oops"})
        Traceback (most recent call last):
        ...
        InvalidMessageFormatError: attachments must be a list
    """

    pass
