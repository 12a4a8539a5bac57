import logging

from langchain_core.documents import Document
from langchain_core.vectorstores import VectorStore

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5
DEFAULT_SIMILARITY_THRESHOLD = 0.4


class ContextRetriever:
    """Runs the fixed similarity query used to ground every chat turn."""

    def __init__(
        self,
        store: VectorStore,
        top_k: int = DEFAULT_TOP_K,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ):
        self.store = store
        self.top_k = top_k
        self.similarity_threshold = similarity_threshold

    async def retrieve(self, question: str) -> list[Document]:
        """Return up to ``top_k`` documents scoring at least the threshold, best first."""
        try:
            scored = await self.store.asimilarity_search_with_relevance_scores(
                question,
                k=self.top_k,
                score_threshold=self.similarity_threshold,
            )
        except Exception as e:
            logger.error(f"Similarity search failed: {e}")
            raise

        documents = [document for document, _score in scored]
        logger.info(f"Retrieved {len(documents)} context documents")
        return documents


def format_documents(documents: list[Document]) -> str:
    """Render documents as ``Product Name/Text`` blocks separated by a blank line."""
    return "\n".join(
        f"Product Name: {document.metadata.get('name')}\nText: {document.page_content}\n"
        for document in documents
    )
