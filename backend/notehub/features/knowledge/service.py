"""
Knowledge feature: fallback concept summaries for sparse search results.

There is no external knowledge base behind this; the card is a fixed string
template filled with the query and an optional branch hint.
"""

from notehub.features.notes.schemas import ExternalKnowledge

SUMMARY_SOURCE = "External Knowledge Base"
DEFAULT_BRANCH_HINT = "engineering"


class KnowledgeService:
    """Builds the "Concept Summary" card for a query."""

    def __init__(self, threshold: int = 3):
        self.threshold = threshold

    def needs_summary(self, internal_count: int) -> bool:
        """A summary is attached when fewer than `threshold` notes matched."""
        return internal_count < self.threshold

    def summarize(self, query: str, branch: str | None = None) -> ExternalKnowledge:
        hint = branch or DEFAULT_BRANCH_HINT
        return ExternalKnowledge(
            source=SUMMARY_SOURCE,
            title=f"Concept Summary: {query}",
            summary=(
                f"We found limited local PDFs, but here is what you need to know about {query}. "
                f"This topic usually covers foundational principles in {hint}. "
                "Important questions often involve derivations and practical applications."
            ),
        )
