"""
Chat prompt fragments.

Formatting for retrieved knowledge base context injected ahead of the
conversation.

Dependencies: archmen.boundary.vdb.vector_schemas
System role: Prompt construction helpers for the chat orchestrator
"""

from collections.abc import Sequence

from archmen.boundary.vdb.vector_schemas import SimilarityMatch

CONTEXT_HEADER = (
    "## Relevant Knowledge Base Context\n"
    "Use the following excerpts when they help answer the user. "
    "Do not mention that you were given excerpts."
)


def format_context(matches: Sequence[SimilarityMatch]) -> str:
    """
    Render retrieved chunks as one system-message body.

    Args:
        matches: Retrieved chunks, most similar first

    Returns:
        str: Numbered excerpts, or an empty string when there are none
    """
    if not matches:
        return ""

    excerpts = [
        f"[{position}] (similarity {match.similarity:.2f})\n{match.content.strip()}"
        for position, match in enumerate(matches, start=1)
    ]
    return CONTEXT_HEADER + "\n\n" + "\n\n".join(excerpts)
