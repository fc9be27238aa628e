"""Async Anthropic Messages client used for context queries and image descriptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import anthropic

from .config import ReasoningConfig
from .errors import ReasoningError
from .prompts import IMAGE_DESCRIPTION_PROMPT

NO_DESCRIPTION = "No description returned."

ContentBlock = dict[str, Any]


class ReasoningCapability(Protocol):
    """What the query engine and ingestion need from a language model."""

    async def complete(
        self,
        content: list[ContentBlock],
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str | None:
        """Send one user message, return the first text block (or None)."""
        ...

    async def describe_image(self, data_b64: str, media_type: str) -> str:
        """Return a textual description of a base64 image."""
        ...

    def ensure_ready(self) -> None:
        """Raise MissingConfigurationError if a call could not be made."""
        ...


def text_block(text: str) -> ContentBlock:
    return {"type": "text", "text": text}


def image_block(data_b64: str, media_type: str) -> ContentBlock:
    return {
        "type": "image",
        "source": {
            "type": "base64",
            "media_type": media_type,
            "data": data_b64,
        },
    }


@dataclass
class ReasoningClient:
    """
    Thin async wrapper over the Anthropic Messages API.

    One request per call and no retries: any non-success status or
    transport failure is raised as ReasoningError with the upstream
    status and message attached. The API key is checked on the first call
    that needs it, or up front via ensure_ready().
    """

    config: ReasoningConfig = field(default_factory=ReasoningConfig)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    _client: anthropic.AsyncAnthropic | None = field(default=None, repr=False)

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Get or create the Anthropic client."""
        if self._client is None:
            client_kwargs: dict[str, Any] = {
                "api_key": self.config.require_api_key(),
                "max_retries": 0,
            }
            if self.config.base_url:
                client_kwargs["base_url"] = self.config.base_url
            self._client = anthropic.AsyncAnthropic(**client_kwargs)
        return self._client

    async def complete(
        self,
        content: list[ContentBlock],
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str | None:
        """
        Make a single Messages API call.

        Args:
            content: Content blocks of the single user message
            max_tokens: Override for config.max_tokens
            temperature: Override for config.temperature (None = config value)

        Returns:
            Text of the first text block, or None if the response has none

        Raises:
            MissingConfigurationError: If no API key is configured
            ReasoningError: If the API call fails
        """
        client = self._get_client()

        request_params: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": max_tokens or self.config.max_tokens,
            "temperature": temperature if temperature is not None else self.config.temperature,
            "messages": [{"role": "user", "content": content}],
        }

        try:
            response = await client.messages.create(**request_params)
        except anthropic.APIStatusError as e:
            raise ReasoningError(
                f"Anthropic API error: {e.status_code} - {e.message}",
                status_code=e.status_code,
                detail=e.message,
            ) from e
        except anthropic.APIError as e:
            raise ReasoningError(f"Anthropic API error: {e}", detail=str(e)) from e

        for block in response.content:
            if block.type == "text":
                return block.text

        self.logger.warning(f"Response from {self.config.model} contained no text block")
        return None

    def ensure_ready(self) -> None:
        """
        Check the credential without making a request.

        Raises:
            MissingConfigurationError: If no API key is configured
        """
        self._get_client()

    async def describe_image(self, data_b64: str, media_type: str) -> str:
        """
        Ask the vision model for a detailed description of an image.

        Args:
            data_b64: Base64 image payload
            media_type: e.g. ``image/jpeg``

        Returns:
            The description, or a fixed fallback if no text came back
        """
        description = await self.complete(
            [image_block(data_b64, media_type), text_block(IMAGE_DESCRIPTION_PROMPT)],
        )
        return description if description is not None else NO_DESCRIPTION


__all__ = [
    "ContentBlock",
    "NO_DESCRIPTION",
    "ReasoningCapability",
    "ReasoningClient",
    "image_block",
    "text_block",
]
