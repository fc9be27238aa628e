"""Tests for response composition."""

from glasses_context.response_composer import (
    DEFAULT_IMAGE_ALT,
    ImagePart,
    TextPart,
    compose,
    to_content,
)
from glasses_context.response_parser import QueryResult


def test_text_only():
    parts = compose(QueryResult(answer_text="Just text."))
    assert parts == [TextPart(text="Just text.")]


def test_image_comes_first():
    image = ImagePart(data="QUJD", mime_type="image/png")
    parts = compose(QueryResult("With image.", "2025-01-01-00-00-00"), image)

    assert parts[0] is image
    assert parts[1] == TextPart(text="With image.")
    assert len(parts) == 2


def test_empty_text_part_kept():
    """The text part is present even when the answer is empty."""
    parts = compose(QueryResult(answer_text=""))
    assert parts == [TextPart(text="")]


def test_to_content_wire_shape():
    image = ImagePart(data="QUJD", mime_type="image/jpeg")
    content = to_content(compose(QueryResult("Answer."), image))

    assert content == {
        "content": [
            {"type": "image", "data": "QUJD", "mimeType": "image/jpeg", "alt": DEFAULT_IMAGE_ALT},
            {"type": "text", "text": "Answer."},
        ]
    }
