"""
Seed the vector store with one document per catalog product.

Usage:
    python -m scripts.ingest_products            # add/overwrite product documents
    python -m scripts.ingest_products --reset    # drop the collection first
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is importable when run directly
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from catalog.repository import ProductRepository  # noqa: E402
from core.config import load_settings  # noqa: E402
from core.logging import setup_logging  # noqa: E402
from retrieval.ingest import ingest_products  # noqa: E402
from retrieval.store import build_vector_store  # noqa: E402

logger = logging.getLogger("scripts.ingest_products")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="ingest_products", description="Load the product catalog into the vector store.")
    parser.add_argument("--products", default=None, help="Catalog JSON file (defaults to PRODUCTS_FILE).")
    parser.add_argument("--reset", action="store_true", default=False, help="Delete the collection before ingesting.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logging()
    settings = load_settings()

    if not settings.vector_store_dir:
        logger.error("VECTOR_STORE_DIR is not set; ingesting into an in-memory store would be lost on exit")
        return 1

    repository = ProductRepository.from_file(args.products or settings.products_file)
    store = build_vector_store(settings)
    if args.reset:
        logger.info(f"Resetting collection '{settings.vector_store_collection}'")
        store.reset_collection()

    count = ingest_products(store, repository.get_product_list())
    logger.info(f"Done: {count} documents in '{settings.vector_store_collection}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
