import logging

from langchain_core.documents import Document
from langchain_core.vectorstores import VectorStore

from schemas.product import Product

logger = logging.getLogger(__name__)


def product_to_document(product: Product) -> Document:
    text = "\n".join(part for part in (product.shortDescription, product.description) if part)
    return Document(
        page_content=text,
        metadata={"name": product.name, "id": product.id, "tags": ",".join(product.tags)},
    )


def ingest_products(store: VectorStore, products: list[Product]) -> int:
    """Add one document per product, keyed by product id so re-runs overwrite."""
    documents = [product_to_document(product) for product in products]
    if not documents:
        logger.warning("No products to ingest")
        return 0
    store.add_documents(documents, ids=[product.id for product in products])
    logger.info(f"Ingested {len(documents)} product documents")
    return len(documents)
