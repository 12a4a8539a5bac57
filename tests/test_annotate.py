from schemas.product import Product
from services.annotate import annotate_products, process_results


def _product(id, name):
    return Product(id=id, name=name)


def test_every_occurrence_is_marked():
    products = [_product("1", "Roadster 500")]
    text = "Roadster 500 is light. I'd pick the Roadster 500."
    assert annotate_products(text, products) == (
        "{{Roadster 500|1}} is light. I'd pick the {{Roadster 500|1}}."
    )


def test_text_without_product_names_is_unchanged():
    assert annotate_products("No bikes here.", [_product("1", "Roadster 500")]) == "No bikes here."


def test_longer_name_first_gets_rewritten_by_shorter_name():
    # Plain substring replacement in catalog order: "Widget" also matches
    # inside the marker produced for "Widget A".
    products = [_product("1", "Widget A"), _product("2", "Widget")]
    assert annotate_products("I love Widget A", products) == "I love {{{{Widget|2}} A|1}}"


def test_shorter_name_first_hides_longer_name():
    products = [_product("2", "Widget"), _product("1", "Widget A")]
    assert annotate_products("I love Widget A", products) == "I love {{Widget|2}} A"


def test_products_without_name_are_skipped():
    products = [_product("0", ""), _product("1", "Roadster 500")]
    assert annotate_products("Roadster 500", products) == "{{Roadster 500|1}}"


def test_blank_results_are_dropped_and_order_kept():
    products = [_product("1", "CityLite E")]
    texts = ["First CityLite E", None, "", "   ", "Second"]
    assert process_results(texts, products) == ["First {{CityLite E|1}}", "Second"]


def test_no_results():
    assert process_results([], [_product("1", "x")]) == []
