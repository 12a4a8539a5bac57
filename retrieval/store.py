import logging

from langchain_chroma import Chroma
from langchain_core.vectorstores import VectorStore
from langchain_openai import OpenAIEmbeddings

from core.config import Settings

logger = logging.getLogger(__name__)


def build_vector_store(settings: Settings) -> VectorStore:
    """Open the Chroma collection holding the product documents."""
    embeddings = OpenAIEmbeddings(
        model=settings.embedding_model,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )
    store = Chroma(
        collection_name=settings.vector_store_collection,
        embedding_function=embeddings,
        persist_directory=settings.vector_store_dir,
        collection_metadata={"hnsw:space": "cosine"},
    )
    logger.info(
        f"Opened vector store collection '{settings.vector_store_collection}' "
        f"({settings.vector_store_dir or 'in-memory'})"
    )
    return store
