"""Render every stored transcript and image description into one context blob."""

from __future__ import annotations

from .artifact_store import Artifact, ArtifactCategory, ArtifactStore

# (group wrapper tag, per-entry tag) for each category, in render order
CATEGORY_TAGS: tuple[tuple[ArtifactCategory, str, str], ...] = (
    (ArtifactCategory.TRANSCRIPT, "transcripts", "transcript"),
    (ArtifactCategory.IMAGE_DESCRIPTION, "image_descriptions", "image_description"),
)


def render_entry(tag: str, artifact: Artifact) -> list[str]:
    return [
        f'<{tag} timestamp="{artifact.timestamp}">',
        f"\n{artifact.text}\n",
        f"</{tag}>",
    ]


class ContextAssembler:
    """
    Build the query-scoped context from the artifact store.

    Transcripts come first, then image descriptions; each group is sorted by
    timestamp and wrapped in its own tag. Empty groups are left out, so an
    empty store renders as an empty string. There is no size cap.
    """

    def __init__(self, store: ArtifactStore):
        self.store = store

    def build(self) -> str:
        parts: list[str] = []
        for category, group_tag, entry_tag in CATEGORY_TAGS:
            artifacts = self.store.list_text(category)
            if not artifacts:
                continue
            parts.append(f"<{group_tag}>")
            for artifact in artifacts:
                parts.extend(render_entry(entry_tag, artifact))
            parts.append(f"</{group_tag}>")
        return "\n".join(parts)


__all__ = ["CATEGORY_TAGS", "ContextAssembler", "render_entry"]
