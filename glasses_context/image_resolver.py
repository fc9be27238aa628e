"""Map a cited timestamp back to the stored image bytes."""

from __future__ import annotations

import asyncio
import base64

from .artifact_store import ArtifactStore
from .response_composer import ImagePart


class ImageResolver:
    """
    Resolve a cited timestamp to an ImagePart.

    A citation with no stored image resolves to None, so the answer is
    still returned as text only.
    """

    def __init__(self, store: ArtifactStore):
        self.store = store

    def resolve(self, cited_timestamp: str | None) -> ImagePart | None:
        if cited_timestamp is None:
            return None

        image = self.store.find_image_by_timestamp(cited_timestamp)
        if image is None:
            return None

        return ImagePart(
            data=base64.b64encode(image.data).decode("ascii"),
            mime_type=image.media_type,
            timestamp=image.timestamp,
        )

    async def resolve_async(self, cited_timestamp: str | None) -> ImagePart | None:
        """Same as resolve(), with the directory scan run off the event loop."""
        if cited_timestamp is None:
            return None
        return await asyncio.to_thread(self.resolve, cited_timestamp)


__all__ = ["ImageResolver"]
