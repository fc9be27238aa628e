"""
Parse reasoning responses into an answer and an optional cited image timestamp.

A malformed or empty upstream response never raises here; it degrades to a
fallback answer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .prompts import CITATION_TAG

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer provided."


@dataclass
class QueryResult:
    """Parsed reasoning output, before image resolution."""

    answer_text: str
    cited_timestamp: str | None = None

    @property
    def has_citation(self) -> bool:
        return self.cited_timestamp is not None


class ResponseParser:
    """Extract the citation marker from a reasoning response."""

    CITATION = re.compile(
        rf"<{CITATION_TAG}>(.*?)</{CITATION_TAG}>",
        re.IGNORECASE | re.DOTALL,
    )

    def parse(self, response: str | None) -> QueryResult:
        """
        Parse a raw response.

        Only the first marker is honoured: its payload becomes the cited
        timestamp and the marker is removed from the answer.

        Args:
            response: Raw model text, or None if no text block came back

        Returns:
            QueryResult with trimmed answer text
        """
        if response is None:
            logger.warning("Reasoning response had no text block")
            return QueryResult(answer_text=NO_ANSWER)

        match = self.CITATION.search(response)
        cited = match.group(1).strip() if match else None

        answer = self.CITATION.sub("", response, count=1).strip()
        return QueryResult(answer_text=answer, cited_timestamp=cited or None)

    def extract_citation(self, response: str) -> str | None:
        match = self.CITATION.search(response)
        if match:
            return match.group(1).strip() or None
        return None


def parse_query_response(response: str | None) -> QueryResult:
    """Convenience function to parse a response."""
    return ResponseParser().parse(response)


__all__ = ["NO_ANSWER", "QueryResult", "ResponseParser", "parse_query_response"]
