"""
Prompt templates for context queries and image descriptions.
"""

from __future__ import annotations

CITATION_TAG = "relevant_image"

IMAGE_DESCRIPTION_PROMPT = "Please describe this image in detail."


def build_query_prompt(context: str, question: str) -> str:
    """
    Build the prompt sent for a context query.

    Args:
        context: Output of ContextAssembler.build()
        question: The caller's question

    Returns:
        Prompt text with context, instructions and question sections
    """
    return f"""<context>
{context}
</context>

<instructions>
You are an AI assistant specialized in analyzing and retrieving information from timestamped transcripts and image descriptions.

Based on the information provided in the <context> tag, please answer the question below. Follow these guidelines:

1. Always provide a complete text answer to the question, explaining what you found in the context.
2. Prioritize more recent information (files with more recent timestamps) when relevant.
3. If one image is particularly relevant to answering this question, specify its timestamp using <{CITATION_TAG}>timestamp</{CITATION_TAG}> tags AFTER your complete answer.
</instructions>

<question>
{question}
</question>"""


__all__ = ["CITATION_TAG", "IMAGE_DESCRIPTION_PROMPT", "build_query_prompt"]
