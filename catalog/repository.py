import json
import logging
from pathlib import Path

from pydantic import ValidationError

from schemas.product import Product

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Read-only product catalog, loaded once from a JSON file.

    The file holds either a list of products or an object with a ``data``
    list. Catalog order is file order.
    """

    def __init__(self, products: list[Product]):
        self._products = list(products)
        self._by_id = {product.id: product for product in self._products}

    @classmethod
    def from_file(cls, path: str | Path) -> "ProductRepository":
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load product catalog from {path}: {e}")
            raise

        if isinstance(raw, dict):
            raw = raw.get("data", [])
        if not isinstance(raw, list):
            raise ValueError(f"Product catalog {path} must contain a list of products")

        try:
            products = [Product.model_validate(item) for item in raw]
        except ValidationError as e:
            logger.error(f"Invalid product entry in {path}: {e}")
            raise

        logger.info(f"Loaded {len(products)} products from {path}")
        return cls(products)

    def get_product_by_id(self, product_id: str | None) -> Product | None:
        if not product_id or not product_id.strip():
            return None
        return self._by_id.get(product_id.strip())

    def get_product_list(self) -> list[Product]:
        return list(self._products)

    def __len__(self):
        return len(self._products)
