"""Base response formatter for chat-surface pipelines.

Every pipeline (slack, fb, text, web) inherits from this class. The base
class owns the delivery order and the handling of capabilities a surface
lacks; subclasses say how one attachment is rendered, how rendered elements
are batched and how a finished payload reaches the chat surface.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Sequence, TypeVar

from infrastructure.logging import get_module_logger
from infrastructure.platforms.capabilities.models import (
    CapabilityDeclaration,
    PlatformCapability,
)
from infrastructure.platforms.exceptions import CapabilityNotSupportedError
from infrastructure.platforms.files import remove_file
from infrastructure.platforms.formatters.batching import chunk
from infrastructure.platforms.formatters.markdown import (
    MarkdownRenderer,
    RendererOverrides,
)
from infrastructure.platforms.models import (
    Attachment,
    FormatterContext,
    FormatterRequest,
)

logger = get_module_logger()

PayloadT = TypeVar("PayloadT")

UNSUPPORTED_FILE_MESSAGE = "Uploading file is not supported for {adapter} adapter."


class BaseResponseFormatter(ABC, Generic[PayloadT]):
    """Abstract base class for chat-surface pipelines.

    A pipeline turns a ``FormatterRequest`` into native output in a fixed
    order: plain message, then file, then attachments. Requests with none
    of the three are logged as invalid.

    Subclasses must:
    - Declare their capabilities via ``get_capabilities()``
    - Render one attachment via ``render()``
    - Send a plain message via ``send_message()``
    - Send rendered attachments via ``send_attachments()``

    Attributes:
        renderer: Markdown renderer configured with this pipeline's overrides.
        batch_size: Maximum elements per downstream call (0 means no batching).
    """

    def __init__(self, overrides: RendererOverrides, batch_size: int = 0):
        self.renderer = MarkdownRenderer(overrides)
        self.batch_size = batch_size
        self._logger = logger.bind(formatter=self.__class__.__name__)

    @abstractmethod
    def get_capabilities(self) -> CapabilityDeclaration:
        """Return the capabilities this pipeline declares."""

    @property
    def platform_id(self) -> str:
        return self.get_capabilities().platform_id

    def supports(self, capability: PlatformCapability) -> bool:
        return self.get_capabilities().supports(capability)

    def require_capability(self, capability: PlatformCapability) -> None:
        """Raise if this pipeline lacks ``capability``.

        Raises:
            CapabilityNotSupportedError: If the capability is not declared.
        """
        if not self.supports(capability):
            raise CapabilityNotSupportedError(
                f"Pipeline {self.platform_id} does not support {capability.value}"
            )

    @abstractmethod
    def render(self, attachment: Attachment) -> PayloadT:
        """Render one attachment into this surface's element type."""

    def load_attachments(self, request: FormatterRequest) -> List[Any]:
        """Read the request's attachments in the form ``render`` expects."""
        return request.attachment_models()

    def batch(self, payloads: Sequence[PayloadT]) -> List[List[PayloadT]]:
        """Split rendered elements into chunks the surface accepts.

        Pipelines without a batch size always send a single chunk.
        """
        if self.batch_size < 1:
            return [list(payloads)]
        return chunk(payloads, self.batch_size)

    @abstractmethod
    def send_message(
        self, request: FormatterRequest, context: FormatterContext, text: str
    ) -> None:
        """Render and deliver a plain text message."""

    @abstractmethod
    def send_attachments(
        self,
        request: FormatterRequest,
        context: FormatterContext,
        payloads: List[PayloadT],
    ) -> None:
        """Deliver rendered attachments."""

    def send_file(self, request: FormatterRequest, context: FormatterContext) -> None:
        """Deliver the request's local file.

        Pipelines declaring FILE_SHARING must override this.
        """
        self.require_capability(PlatformCapability.FILE_SHARING)
        raise NotImplementedError

    def send_empty(self, request: FormatterRequest, context: FormatterContext) -> None:
        """Called when a request carries nothing to deliver."""

    def deliver(self, request: FormatterRequest, context: FormatterContext) -> None:
        """Run the pipeline for one request.

        A message and a file may arrive together: the message is sent first
        and the file is still delivered or rejected, so its temp copy is
        always cleaned up.
        """
        if request.has_message or request.has_file:
            if request.has_message:
                self.send_message(request, context, request.message)
            if request.has_file:
                self.deliver_file(request, context)
        elif request.has_attachments:
            payloads = [self.render(a) for a in self.load_attachments(request)]
            self._logger.debug(
                "attachments_rendered",
                attachment_count=len(payloads),
            )
            self.send_attachments(request, context, payloads)
        else:
            self._logger.warning(
                "invalid_response_description",
                reason="no message, file or attachments found",
            )
            self.send_empty(request, context)

    def deliver_file(self, request: FormatterRequest, context: FormatterContext) -> None:
        """Upload the file where the surface allows it, otherwise reject it."""
        if self.supports(PlatformCapability.FILE_SHARING):
            self.send_file(request, context)
        else:
            self.reject_file(request, context)

    def reject_file(self, request: FormatterRequest, context: FormatterContext) -> None:
        """Drop the temp file and tell the user uploads are not supported."""
        remove_file(request.file_path)
        self._logger.debug(
            "file_upload_not_supported",
            file_name=request.file_name,
        )
        adapter = context.bot.adapter_name or self.platform_id
        self.send_message(
            request, context, UNSUPPORTED_FILE_MESSAGE.format(adapter=adapter)
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(platform_id={self.platform_id!r})"
