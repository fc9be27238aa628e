"""
Capture-side producers.

The device runtime calls ``on_transcript_final`` when speech recognition
finalizes a sentence and ``on_image_captured`` for every encoded camera
frame. Producers filter and throttle, then hand artifacts to a sink:
either in-process (StoreSink) or the ingestion server (HttpSink).

Sink failures are logged and reported as False; they never propagate into
the host loop.
"""

from __future__ import annotations

import base64
import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

import httpx

from .errors import ContextQueryError
from .ingestion import IngestionService

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_ENDPOINT = "http://localhost:3000/media"
MIN_TRANSCRIPT_LENGTH = 5
DEFAULT_CAPTURE_INTERVAL = 5.0
MIN_CAPTURE_INTERVAL = 1.0


class ArtifactSink(Protocol):
    """Destination for captured artifacts."""

    async def send(self, payload: dict[str, Any]) -> None:
        """Deliver one ``/media``-shaped payload. Raises on failure."""
        ...


class StoreSink:
    """Ingest directly into a local IngestionService."""

    def __init__(self, service: IngestionService):
        self.service = service

    async def send(self, payload: dict[str, Any]) -> None:
        await self.service.handle_payload(payload)


class HttpSink:
    """POST payloads as JSON to the ingestion server."""

    def __init__(
        self,
        endpoint: str = DEFAULT_MEDIA_ENDPOINT,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.endpoint = endpoint
        self._client = client
        self.timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def send(self, payload: dict[str, Any]) -> None:
        response = await self._get_client().post(self.endpoint, json=payload)
        response.raise_for_status()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


async def _deliver(sink: ArtifactSink, payload: dict[str, Any], kind: str) -> bool:
    try:
        await sink.send(payload)
    except (httpx.HTTPError, ContextQueryError, OSError) as e:
        logger.warning(f"Failed to send {kind}: {e}")
        return False
    logger.info(f"Sent {kind}")
    return True


class TranscriptProducer:
    """Forward final transcripts that are long enough to be meaningful."""

    def __init__(self, sink: ArtifactSink, min_length: int = MIN_TRANSCRIPT_LENGTH):
        self.sink = sink
        self.min_length = min_length

    async def on_transcript_final(self, text: str) -> bool:
        """
        Handle one finalized transcript.

        Returns:
            True if the transcript was delivered to the sink
        """
        if len(text.strip()) < self.min_length:
            logger.info(f"Ignoring short transcription (< {self.min_length} chars): {text!r}")
            return False
        return await _deliver(self.sink, {"transcript": text}, "transcript")


class ImageProducer:
    """
    Forward camera frames, at most one per ``capture_interval`` seconds.

    A frame arriving while the previous one is still being delivered is
    dropped.
    """

    def __init__(
        self,
        sink: ArtifactSink,
        capture_interval: float = DEFAULT_CAPTURE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.sink = sink
        self.capture_interval = max(capture_interval, MIN_CAPTURE_INTERVAL)
        self.clock = clock
        self.is_processing = False
        self.last_capture_time: float | None = None

    def _due(self, now: float) -> bool:
        if self.is_processing:
            return False
        if self.last_capture_time is None:
            return True
        return now - self.last_capture_time >= self.capture_interval

    async def on_image_captured(self, data: bytes, media_type: str = "image/jpeg") -> bool:
        """
        Handle one captured frame.

        Returns:
            True if the frame was delivered to the sink
        """
        now = self.clock()
        if not self._due(now):
            return False

        self.last_capture_time = now
        self.is_processing = True
        try:
            payload = {
                "image": base64.b64encode(data).decode("ascii"),
                "mediaType": media_type,
            }
            return await _deliver(self.sink, payload, "image")
        finally:
            self.is_processing = False


__all__ = [
    "ArtifactSink",
    "DEFAULT_MEDIA_ENDPOINT",
    "HttpSink",
    "ImageProducer",
    "StoreSink",
    "TranscriptProducer",
]
