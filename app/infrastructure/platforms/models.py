"""Platform-agnostic data models for response formatting.

A response description arrives on the event bus as a loose mapping. These
models give the pipelines a typed view of it: the request itself, the
attachments it carries and the bot the response is formatted for.

Usage:
    request = FormatterRequest.from_payload(event.payload)

    for attachment in request.attachment_models():
        title = extract_title(attachment)
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple

from infrastructure.platforms.exceptions import InvalidMessageFormatError


def _as_text(value: Any) -> str:
    """Coerce a loosely typed attribute to a string, ``None`` becoming empty."""
    if value is None:
        return ""
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


class ResponseHandle(Protocol):
    """The bot runtime's handle on the message being answered."""

    message: Any
    envelope: Any

    def send(self, text: str) -> Any: ...

    def reply(self, text: str) -> Any: ...


Emitter = Callable[[str, Dict[str, Any]], None]


@dataclass(frozen=True)
class Field:
    """A title/value pair inside an attachment.

    ``short`` marks a field that may share a row with an adjacent short field.
    """

    title: str = ""
    value: str = ""
    short: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Field":
        return cls(
            title=_as_text(data.get("title")),
            value=_as_text(data.get("value")),
            short=bool(data.get("short", False)),
        )


@dataclass(frozen=True)
class Attachment:
    """One structured card of a response.

    Attributes:
        title: Card heading
        text: Main body text
        pretext: Text shown above the card
        fallback: Plain summary used when nothing else describes the card
        image_url: Primary image candidate
        thumb_url: Second image candidate
        author_icon: Third image candidate
        footer_icon: Last image candidate
        title_link: Explicit link for the card
        fields: Ordered title/value pairs
    """

    title: Optional[str] = None
    text: Optional[str] = None
    pretext: Optional[str] = None
    fallback: Optional[str] = None
    image_url: Optional[str] = None
    thumb_url: Optional[str] = None
    author_icon: Optional[str] = None
    footer_icon: Optional[str] = None
    title_link: Optional[str] = None
    fields: Tuple[Field, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Attachment":
        """Build an attachment from a loose mapping, ignoring unknown keys.

        Raises:
            InvalidMessageFormatError: If ``data`` is not a mapping or its
                ``fields`` entry is not a list of mappings.
        """
        if not isinstance(data, Mapping):
            raise InvalidMessageFormatError(
                f"attachment must be a mapping, got {type(data).__name__}"
            )
        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, (list, tuple)) or not all(
            isinstance(f, Mapping) for f in raw_fields
        ):
            raise InvalidMessageFormatError("attachment fields must be a list of mappings")

        return cls(
            title=_optional_text(data.get("title")),
            text=_optional_text(data.get("text")),
            pretext=_optional_text(data.get("pretext")),
            fallback=_optional_text(data.get("fallback")),
            image_url=_optional_text(data.get("image_url")),
            thumb_url=_optional_text(data.get("thumb_url")),
            author_icon=_optional_text(data.get("author_icon")),
            footer_icon=_optional_text(data.get("footer_icon")),
            title_link=_optional_text(data.get("title_link")),
            fields=tuple(Field.from_dict(f) for f in raw_fields),
        )


@dataclass(frozen=True)
class TemplateElement:
    """A messenger generic-template card."""

    title: str
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    item_url: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Serialize the card, omitting absent keys."""
        element = {"title": self.title}
        if self.subtitle is not None:
            element["subtitle"] = self.subtitle
        if self.image_url is not None:
            element["image_url"] = self.image_url
        if self.item_url is not None:
            element["item_url"] = self.item_url
        return element


@dataclass(frozen=True)
class BotIdentity:
    """The running bot, as far as formatting is concerned.

    Attributes:
        name: Name the bot answers to
        adapter_name: Chat adapter the bot is connected through (slack, fb, ...)
        adapter_token: Adapter API token, used for Slack file uploads
    """

    name: str
    adapter_name: Optional[str] = None
    adapter_token: Optional[str] = None


@dataclass
class FormatterRequest:
    """An adapter-agnostic response description.

    ``attachments`` keeps the raw mappings as received. ``None`` means the key
    was absent, an empty list means attachments were sent but there are none.
    """

    response: Optional[ResponseHandle] = None
    message: Optional[str] = None
    attachments: Optional[List[Mapping[str, Any]]] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    initial_comment: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FormatterRequest":
        """Read a request from an inbound event payload.

        Both snake_case and camelCase file keys are accepted.

        Raises:
            InvalidMessageFormatError: If the payload is not a mapping or
                ``attachments`` is present but not a list.
        """
        if not isinstance(payload, Mapping):
            raise InvalidMessageFormatError(
                f"payload must be a mapping, got {type(payload).__name__}"
            )
        attachments = payload.get("attachments")
        if attachments is not None and not isinstance(attachments, (list, tuple)):
            raise InvalidMessageFormatError("attachments must be a list")

        return cls(
            response=payload.get("response"),
            message=_optional_text(payload.get("message")),
            attachments=list(attachments) if attachments is not None else None,
            file_path=payload.get("file_path") or payload.get("filePath"),
            file_name=payload.get("file_name") or payload.get("fileName"),
            initial_comment=payload.get("initial_comment"),
        )

    @property
    def has_message(self) -> bool:
        return bool(self.message)

    @property
    def has_file(self) -> bool:
        return bool(self.file_path and self.file_name)

    @property
    def has_attachments(self) -> bool:
        """True when the attachments key was present, even if empty."""
        return self.attachments is not None

    def attachment_models(self) -> List[Attachment]:
        """Typed view of the raw attachments (empty when absent)."""
        return [Attachment.from_dict(a) for a in self.attachments or []]


@dataclass
class FormatterContext:
    """Runtime collaborators handed to a pipeline for one delivery."""

    bot: BotIdentity
    emit: Emitter
