"""
Artifact ingestion: transcripts and images arriving from capture.

An image is stored together with a generated description under the same
timestamp, so the description joins back to the image at query time.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import timestamps
from .artifact_store import DEFAULT_MEDIA_TYPE, ArtifactCategory, ArtifactStore
from .errors import InvalidInputError
from .llm_client import ReasoningCapability

MEDIA_TYPE_PATTERN = re.compile(r"^image/[A-Za-z0-9.+-]+$")


@dataclass
class IngestResult:
    """Where an ingested artifact ended up, relative to the store's parent."""

    timestamp: str
    files: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, str]:
        return dict(self.files)


def decode_image(image_b64: object) -> bytes:
    """
    Decode a base64 image payload.

    Whitespace is dropped first, so line-wrapped (MIME style) base64 is
    accepted.

    Raises:
        InvalidInputError: If the payload is not a non-empty base64 string
    """
    if not isinstance(image_b64, str) or not image_b64.strip():
        raise InvalidInputError("Field 'image' must be a non-empty base64 string", field="image")
    try:
        return base64.b64decode("".join(image_b64.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Field 'image' is not valid base64: {e}", field="image") from e


def validate_media_type(media_type: object) -> str:
    if not isinstance(media_type, str) or not MEDIA_TYPE_PATTERN.match(media_type):
        raise InvalidInputError(
            f"Field 'mediaType' must look like 'image/<type>', got {media_type!r}",
            field="mediaType",
        )
    return media_type


class IngestionService:
    """Persist transcripts and images (plus their descriptions)."""

    def __init__(
        self,
        store: ArtifactStore,
        client: ReasoningCapability,
        logger: logging.Logger | None = None,
    ):
        self.store = store
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    def _relative(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.store.root.parent))
        except ValueError:
            return str(path)

    def _text_path(self, category: ArtifactCategory, timestamp: str) -> Path:
        return self.store.category_dir(category) / f"{timestamp}{timestamps.TEXT_EXTENSION}"

    def ingest_transcript(self, text: object) -> IngestResult:
        """
        Store a final speech transcript.

        Raises:
            InvalidInputError: If ``text`` is not a string or is blank
            PersistenceError: If the write fails
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Field 'transcript' must be a non-empty string", field="transcript")

        timestamp = self.store.write_text(ArtifactCategory.TRANSCRIPT, text)
        path = self._text_path(ArtifactCategory.TRANSCRIPT, timestamp)
        self.logger.info(f"Saved transcript {path.name}")
        return IngestResult(timestamp=timestamp, files={"saved": self._relative(path)})

    async def ingest_image(
        self,
        image_b64: object,
        media_type: object = DEFAULT_MEDIA_TYPE,
    ) -> IngestResult:
        """
        Store an image and its generated description.

        The credential is checked before anything is written. The image is
        written before the description is requested, so a failed description
        call leaves the image on disk without a description; an image-only
        timestamp is a valid state.

        Raises:
            InvalidInputError: Bad ``image`` or ``mediaType`` field
            PersistenceError: If a write fails
            MissingConfigurationError: No API key configured
            ReasoningError: The description call failed
        """
        if media_type is None:
            media_type = DEFAULT_MEDIA_TYPE
        media_type = validate_media_type(media_type)
        data = decode_image(image_b64)
        self.client.ensure_ready()

        timestamp = timestamps.encode()
        image_path = await asyncio.to_thread(self.store.write_image, timestamp, data, media_type)

        image_b64 = base64.b64encode(data).decode("ascii")
        description = await self.client.describe_image(image_b64, media_type)
        await asyncio.to_thread(
            self.store.write_text,
            ArtifactCategory.IMAGE_DESCRIPTION,
            description,
            timestamp,
        )
        text_path = self._text_path(ArtifactCategory.IMAGE_DESCRIPTION, timestamp)

        self.logger.info(f"Saved image {image_path.name} with description {text_path.name}")
        return IngestResult(
            timestamp=timestamp,
            files={
                "saved_image": self._relative(image_path),
                "description_file": self._relative(text_path),
            },
        )

    async def handle_payload(self, payload: Any) -> IngestResult:
        """
        Dispatch a ``{"transcript": ...}`` or ``{"image": ..., "mediaType"?: ...}`` payload.

        Raises:
            InvalidInputError: If neither field is present as a string
        """
        if not isinstance(payload, dict):
            raise InvalidInputError("Request body must be a JSON object")

        if isinstance(payload.get("transcript"), str):
            return await asyncio.to_thread(self.ingest_transcript, payload["transcript"])

        if isinstance(payload.get("image"), str):
            return await self.ingest_image(payload["image"], payload.get("mediaType"))

        raise InvalidInputError('Request must include a "transcript" or "image" field.')


__all__ = [
    "IngestResult",
    "IngestionService",
    "decode_image",
    "validate_media_type",
]
