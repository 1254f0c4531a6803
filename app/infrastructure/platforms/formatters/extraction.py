"""Attachment field extraction.

Pure functions that pull a title, body text, image and content URL out of an
``Attachment``. Every precedence rule is an ordered tuple of
``(predicate, accessor)`` pairs evaluated by ``first_match``, so the order
in which attachment keys are consulted can be read (and tested) directly.

None of these functions raise on missing data; they degrade to ``""`` or
``None``.
"""

from typing import Any, Callable, Optional, Sequence, Tuple, TypeVar

from infrastructure.platforms.models import Attachment

T = TypeVar("T")

TITLE_LIMIT = 80
TRUNCATED_LENGTH = 75
ELLIPSIS = "..."

Rule = Tuple[Callable[[T], bool], Callable[[T], Any]]


def first_match(
    subject: T, rules: Sequence[Rule], default: Optional[Any] = None
) -> Any:
    """Return the accessor result of the first rule whose predicate holds."""
    for predicate, accessor in rules:
        if predicate(subject):
            return accessor(subject)
    return default


def truncate(text: Optional[str]) -> Optional[str]:
    """Shorten strings of 80 characters or more to 75 plus an ellipsis.

    Slicing is by code point, so multibyte characters are never split.
    """
    if text and len(text) >= TITLE_LIMIT:
        return text[:TRUNCATED_LENGTH] + ELLIPSIS
    return text


def _first_field(attachment: Attachment):
    return attachment.fields[0] if attachment.fields else None


TITLE_RULES: Tuple[Rule, ...] = (
    (lambda a: bool(a.title), lambda a: a.title),
    (lambda a: bool(a.text), lambda a: a.text),
    (
        lambda a: _first_field(a) is not None and bool(_first_field(a).title),
        lambda a: _first_field(a).title,
    ),
    (
        lambda a: _first_field(a) is not None and bool(_first_field(a).value),
        lambda a: _first_field(a).value,
    ),
)

IMAGE_RULES: Tuple[Rule, ...] = (
    (lambda a: bool(a.image_url), lambda a: a.image_url),
    (lambda a: bool(a.thumb_url), lambda a: a.thumb_url),
    (lambda a: bool(a.author_icon), lambda a: a.author_icon),
    (lambda a: bool(a.footer_icon), lambda a: a.footer_icon),
)

FIELD_URL_RULES: Tuple[Rule, ...] = (
    (lambda f: f.title.lower() == "url", lambda f: f.value),
    (lambda f: f.title.lower() == "urls", lambda f: f.value.split(", ")[0]),
)


def extract_title(attachment: Attachment) -> str:
    """Title, else text, else the first field's title, else its value."""
    return truncate(first_match(attachment, TITLE_RULES, default=""))


def extract_image(attachment: Attachment) -> Optional[str]:
    """First of image_url, thumb_url, author_icon, footer_icon."""
    return first_match(attachment, IMAGE_RULES)


def extract_body_text(attachment: Attachment) -> str:
    """Pretext followed by text, falling back to the fallback string."""
    text = attachment.pretext or ""
    if attachment.text:
        text = f"{text} {attachment.text}" if text else attachment.text
    elif not text and attachment.fallback:
        text = attachment.fallback
    return truncate(text)


def extract_content_url(attachment: Attachment) -> Optional[str]:
    """title_link, else the last ``url``/``urls`` field in the attachment."""
    if attachment.title_link:
        return attachment.title_link

    url = None
    for field in attachment.fields:
        match = first_match(field, FIELD_URL_RULES)
        if match is not None:
            url = match
    return url


def extract_field_summary(attachment: Attachment, text: str) -> str:
    """Append ``"title: value"`` for every field while ``text`` is short.

    Fields with neither a title nor a value are skipped. The result is
    truncated after concatenation.
    """
    if attachment.fields and len(text) < TITLE_LIMIT:
        for field in attachment.fields:
            if not field.title and not field.value:
                continue
            summary = f"{field.title}: {field.value}"
            text = f"{text}, {summary}" if text else summary
    return truncate(text)
