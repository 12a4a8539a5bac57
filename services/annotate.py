from schemas.product import Product


def annotate_products(text: str, products: list[Product]) -> str:
    """
    Mark every product name in ``text`` as ``{{name|id}}``.

    Replacement is plain substring replacement in catalog order, so a name
    contained in another product's name can be rewritten inside an earlier
    marker.
    """
    if not text:
        return ""
    for product in products:
        if not product.name:
            continue
        text = text.replace(product.name, "{{" + product.name + "|" + product.id + "}}")
    return text


def process_results(texts: list[str | None], products: list[Product]) -> list[str]:
    """Drop empty or blank completion texts and annotate the rest, keeping order."""
    return [
        annotate_products(text, products)
        for text in texts
        if text and text.strip()
    ]
