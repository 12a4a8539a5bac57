import pytest
from langchain_core.documents import Document

from core.exceptions import PromptTemplateError
from llm.prompts import PromptTemplates, load_prompt_templates
from llm.prompts.templates import WITH_PRODUCT_FILE, WITHOUT_PRODUCT_FILE
from retrieval.context import format_documents

WITH_PRODUCT = "{name}|{tags}|{shortDescription}|{fullDescription}|{additionalContext}"


def test_documents_are_joined_by_blank_lines(documents):
    assert format_documents(documents) == (
        "Product Name: HP-100\nText: Over-ear, 30h battery.\n"
        "\n"
        "Product Name: HP-200\nText: In-ear, 8h battery.\n"
    )


def test_no_documents_render_empty():
    assert format_documents([]) == ""


def test_missing_name_metadata_renders_none():
    assert format_documents([Document(page_content="t", metadata={})]) == "Product Name: None\nText: t\n"


def test_render_without_product(documents):
    templates = PromptTemplates(without_product="Context:\n{context}", with_product=WITH_PRODUCT)
    message = templates.render_without_product(documents)
    assert message["role"] == "system"
    assert message["content"] == "Context:\n" + format_documents(documents)


def test_render_with_product(headphones, documents):
    templates = PromptTemplates(
        without_product="{context}",
        with_product=WITH_PRODUCT,
    )
    message = templates.render_with_product(headphones, documents)
    assert message == {
        "role": "system",
        "content": "HP-100|audio,wireless|Wireless over-ear headphones."
                   "|HP-100 offers 30 hours of battery life and active noise cancelling."
                   "|" + format_documents(documents),
    }


def test_braces_in_values_are_not_reinterpreted(headphones):
    templates = PromptTemplates(without_product="{context}", with_product=WITH_PRODUCT)
    docs = [Document(page_content="use {context} literally", metadata={"name": "{name}"})]
    assert templates.render_without_product(docs)["content"] == format_documents(docs)


def test_rendering_is_deterministic(documents):
    templates = load_prompt_templates()
    assert templates.render_without_product(documents) == templates.render_without_product(documents)


def test_builtin_templates_use_all_fields(headphones, documents):
    templates = load_prompt_templates()
    content = templates.render_with_product(headphones, documents)["content"]
    for expected in ("HP-100", "audio,wireless", headphones.shortDescription, headphones.description, "HP-200"):
        assert expected in content


@pytest.mark.parametrize("template", ["{unknown}", "{context.attr}", "{0}", "{}", "{context"])
def test_malformed_templates_are_rejected(template):
    with pytest.raises(PromptTemplateError):
        PromptTemplates(without_product=template, with_product=WITH_PRODUCT)


def test_load_from_directory(tmp_path):
    (tmp_path / WITHOUT_PRODUCT_FILE).write_text("A {context}", encoding="utf-8")
    (tmp_path / WITH_PRODUCT_FILE).write_text(WITH_PRODUCT, encoding="utf-8")

    templates = load_prompt_templates(str(tmp_path))

    assert templates.without_product == "A {context}"
    assert templates.with_product == WITH_PRODUCT


def test_missing_template_file_is_fatal(tmp_path):
    (tmp_path / WITHOUT_PRODUCT_FILE).write_text("A {context}", encoding="utf-8")
    with pytest.raises(PromptTemplateError, match=WITH_PRODUCT_FILE):
        load_prompt_templates(str(tmp_path))


def test_template_without_context_placeholder_is_fatal():
    with pytest.raises(PromptTemplateError, match="missing placeholders: context"):
        PromptTemplates(without_product="no placeholders at all", with_product=WITH_PRODUCT)


def test_product_template_missing_fields_is_fatal():
    with pytest.raises(PromptTemplateError, match="fullDescription, shortDescription, tags"):
        PromptTemplates(without_product="{context}", with_product="{name} {additionalContext}")


def test_incomplete_template_file_is_fatal(tmp_path):
    (tmp_path / WITHOUT_PRODUCT_FILE).write_text("Answer the user.", encoding="utf-8")
    (tmp_path / WITH_PRODUCT_FILE).write_text(WITH_PRODUCT, encoding="utf-8")
    with pytest.raises(PromptTemplateError, match=WITHOUT_PRODUCT_FILE):
        load_prompt_templates(str(tmp_path))
