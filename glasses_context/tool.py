"""
The ``context_query`` tool: the single query operation exposed to callers.

Pipeline: validate -> assemble -> invoke -> parse -> resolve -> compose.
"""

from __future__ import annotations

import logging
from typing import Any

from .artifact_store import ArtifactStore
from .config import AppConfig
from .context_assembler import ContextAssembler
from .errors import ContextQueryError
from .image_resolver import ImageResolver
from .llm_client import ReasoningCapability, ReasoningClient
from .query_engine import QueryEngine, validate_question
from .response_composer import ResponsePart, compose, to_content

TOOL_NAME = "context_query"
TOOL_DESCRIPTION = (
    "Retrieves information from user's recorded audio conversations and camera logs"
)
TOOL_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "question": {
            "type": "string",
            "description": (
                "Natural language question about the user's recorded conversations "
                "or camera footage (e.g., 'What did I discuss yesterday?', "
                "'Show me pictures from my morning walk')"
            ),
        },
    },
    "required": ["question"],
}


class ContextQueryTool:
    """Answer questions about captured transcripts and images."""

    def __init__(
        self,
        engine: QueryEngine,
        resolver: ImageResolver,
        logger: logging.Logger | None = None,
    ):
        self.engine = engine
        self.resolver = resolver
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_store(
        cls,
        store: ArtifactStore,
        client: ReasoningCapability,
        logger: logging.Logger | None = None,
    ) -> "ContextQueryTool":
        engine = QueryEngine(ContextAssembler(store), client, logger=logger)
        return cls(engine, ImageResolver(store), logger=logger)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        logger: logging.Logger | None = None,
    ) -> "ContextQueryTool":
        store = ArtifactStore(config.storage.data_path, logger=logger)
        client = ReasoningClient(config=config.reasoning)
        return cls.from_store(store, client, logger=logger)

    async def context_query(self, question: str) -> list[ResponsePart]:
        """
        Answer ``question`` against everything stored so far.

        Returns:
            At most one ImagePart followed by exactly one TextPart
        """
        try:
            result = await self.engine.query(question)
            image_part = await self.resolver.resolve_async(result.cited_timestamp)
        except ContextQueryError as e:
            self.logger.error(f"Error in {TOOL_NAME}: {e}")
            raise

        if result.cited_timestamp and image_part is None:
            self.logger.info(f"No stored image for cited timestamp {result.cited_timestamp}")
        return compose(result, image_part)

    async def call(self, arguments: dict[str, Any]) -> dict[str, list[dict[str, Any]]]:
        """Dict-in, dict-out form of context_query()."""
        question = validate_question(arguments.get("question"))
        return to_content(await self.context_query(question))


__all__ = [
    "ContextQueryTool",
    "TOOL_DESCRIPTION",
    "TOOL_INPUT_SCHEMA",
    "TOOL_NAME",
]
