from typing import Optional

from verbum.core.log_config import get_logger
from verbum.models import GroundedPrompt
from verbum.services.embeddings import EmbeddingClient
from verbum.services.grounding import assemble_outcome
from verbum.services.personas import DEFAULT_PERSONA_KEY
from verbum.services.prompts import build_system_prompt
from verbum.services.retriever import SimilarityRetriever

logger = get_logger(__name__)


class GroundingPipeline:
    """Query text -> embedding -> ranked verses -> grounded system prompt."""

    def __init__(self, embedder: EmbeddingClient, retriever: SimilarityRetriever):
        self.embedder = embedder
        self.retriever = retriever

    async def ground(
        self,
        question: str,
        persona_key: str = DEFAULT_PERSONA_KEY,
        top_k: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> GroundedPrompt:
        """Build the grounded system prompt for `question`.

        EmbeddingServiceError propagates: the request fails rather than being
        answered without grounding. A retrieval backend failure degrades to
        the "no matches" block.
        """
        if not question or not question.strip():
            raise ValueError("Question must not be empty")

        # Retrieve relevant verses
        query_embedding = await self.embedder.embed(question)
        outcome = self.retriever.retrieve_outcome(
            query_embedding, top_k=top_k, min_score=min_score
        )

        grounding = assemble_outcome(outcome)
        logger.info(
            "Grounded query with %d verses (%s)", len(grounding.refs), outcome.kind
        )

        return GroundedPrompt(
            question=question,
            system_prompt=build_system_prompt(grounding, persona_key),
            grounding=grounding,
            outcome=outcome,
        )
