"""
Query engine: question -> context -> reasoning call -> QueryResult.

Each query is one sequential pipeline with no state carried between
queries. Store reads run in a worker thread so the event loop only waits
at I/O boundaries.
"""

from __future__ import annotations

import asyncio
import logging

from .context_assembler import ContextAssembler
from .errors import InvalidInputError
from .llm_client import ReasoningCapability, text_block
from .logging_setup import log_section
from .prompts import build_query_prompt
from .response_parser import QueryResult, ResponseParser


def validate_question(question: object) -> str:
    """
    Check that ``question`` is a non-blank string.

    Raises:
        InvalidInputError: Otherwise
    """
    if not isinstance(question, str) or not question.strip():
        raise InvalidInputError("Missing or invalid 'question' parameter", field="question")
    return question


class QueryEngine:
    """Answer one question against the currently stored artifacts."""

    def __init__(
        self,
        assembler: ContextAssembler,
        client: ReasoningCapability,
        logger: logging.Logger | None = None,
        parser: ResponseParser | None = None,
    ):
        self.assembler = assembler
        self.client = client
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or ResponseParser()

    async def query(self, question: str) -> QueryResult:
        """
        Run validate -> assemble -> prompt -> invoke -> parse.

        Raises:
            InvalidInputError: Blank or non-string question (before any I/O)
            PersistenceError: A stored artifact could not be read
            MissingConfigurationError: No API key configured
            ReasoningError: The reasoning call failed
        """
        validate_question(question)

        context = await asyncio.to_thread(self.assembler.build)
        prompt = build_query_prompt(context, question)
        log_section(self.logger, "PROMPT SENT TO MODEL", prompt)

        raw = await self.client.complete([text_block(prompt)])
        result = self.parser.parse(raw)

        log_section(
            self.logger,
            "PROCESSED RESPONSE FROM MODEL",
            f"Text answer: {result.answer_text}\n"
            f"Image timestamp: {result.cited_timestamp or 'None'}",
        )
        return result


__all__ = ["QueryEngine", "validate_question"]
