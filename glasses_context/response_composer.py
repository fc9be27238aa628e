"""Caller-facing response parts for a context query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .response_parser import QueryResult

DEFAULT_IMAGE_ALT = "Relevant image for your query"


@dataclass
class ImagePart:
    """Base64 image attached to an answer."""

    data: str
    mime_type: str
    alt: str = DEFAULT_IMAGE_ALT
    timestamp: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "image",
            "data": self.data,
            "mimeType": self.mime_type,
            "alt": self.alt,
        }


@dataclass
class TextPart:
    """The answer text."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


ResponsePart = Union[ImagePart, TextPart]


def compose(result: QueryResult, image_part: ImagePart | None = None) -> list[ResponsePart]:
    """
    Assemble the response parts.

    The image (if any) always comes first and the text part is always
    last, even when the answer text is empty. Clients that render parts in
    order then show the image above the answer.
    """
    parts: list[ResponsePart] = []
    if image_part is not None:
        parts.append(image_part)
    parts.append(TextPart(text=result.answer_text))
    return parts


def to_content(parts: list[ResponsePart]) -> dict[str, list[dict[str, Any]]]:
    """Wrap parts in the ``{"content": [...]}`` tool result envelope."""
    return {"content": [part.to_dict() for part in parts]}


__all__ = [
    "DEFAULT_IMAGE_ALT",
    "ImagePart",
    "ResponsePart",
    "TextPart",
    "compose",
    "to_content",
]
