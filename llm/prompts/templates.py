import logging
from dataclasses import dataclass
from pathlib import Path
from string import Formatter

from langchain_core.documents import Document

from core.exceptions import PromptTemplateError
from retrieval.context import format_documents
from schemas.product import Product

from .chat import CHAT_WITH_PRODUCT_PROMPT, CHAT_WITHOUT_PRODUCT_PROMPT

logger = logging.getLogger(__name__)

WITHOUT_PRODUCT_FILE = "chat_without_product.txt"
WITH_PRODUCT_FILE = "chat_with_product.txt"

WITHOUT_PRODUCT_FIELDS = frozenset({"context"})
WITH_PRODUCT_FIELDS = frozenset({"name", "tags", "shortDescription", "fullDescription", "additionalContext"})


def _template_fields(name: str, template: str) -> set[str]:
    try:
        parsed = list(Formatter().parse(template))
    except ValueError as e:
        raise PromptTemplateError(f"Prompt template '{name}' is malformed: {e}") from e

    fields = set()
    for _literal, field, _spec, _conversion in parsed:
        if field is None:
            continue
        if not field.isidentifier():
            raise PromptTemplateError(f"Prompt template '{name}' has an invalid placeholder '{{{field}}}'")
        fields.add(field)
    return fields


def _check_template(name: str, template: str, allowed: frozenset[str]) -> str:
    fields = _template_fields(name, template)
    unknown = fields - allowed
    if unknown:
        raise PromptTemplateError(
            f"Prompt template '{name}' uses unknown placeholders: {', '.join(sorted(unknown))}"
        )
    missing = allowed - fields
    if missing:
        raise PromptTemplateError(
            f"Prompt template '{name}' is missing placeholders: {', '.join(sorted(missing))}"
        )
    return template


@dataclass(frozen=True)
class PromptTemplates:
    """The two system prompt templates, validated once and shared by every request."""

    without_product: str
    with_product: str

    def __post_init__(self):
        _check_template(WITHOUT_PRODUCT_FILE, self.without_product, WITHOUT_PRODUCT_FIELDS)
        _check_template(WITH_PRODUCT_FILE, self.with_product, WITH_PRODUCT_FIELDS)

    def render_without_product(self, documents: list[Document]) -> dict:
        content = self.without_product.format(context=format_documents(documents))
        return {"role": "system", "content": content}

    def render_with_product(self, product: Product, documents: list[Document]) -> dict:
        content = self.with_product.format(
            name=product.name,
            tags=",".join(product.tags),
            shortDescription=product.shortDescription,
            fullDescription=product.description,
            additionalContext=format_documents(documents),
        )
        return {"role": "system", "content": content}


def _read_template(directory: Path, filename: str) -> str:
    path = directory / filename
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise PromptTemplateError(f"Cannot read prompt template {path}: {e}") from e


def load_prompt_templates(template_dir: str | None = None) -> PromptTemplates:
    """
    Load the system prompt templates.

    Without ``template_dir`` the built-in prompts are used. With it, both
    ``chat_without_product.txt`` and ``chat_with_product.txt`` must exist there.
    """
    if not template_dir:
        logger.info("Using built-in prompt templates")
        return PromptTemplates(
            without_product=CHAT_WITHOUT_PRODUCT_PROMPT,
            with_product=CHAT_WITH_PRODUCT_PROMPT,
        )

    directory = Path(template_dir)
    templates = PromptTemplates(
        without_product=_read_template(directory, WITHOUT_PRODUCT_FILE),
        with_product=_read_template(directory, WITH_PRODUCT_FILE),
    )
    logger.info(f"Loaded prompt templates from {directory}")
    return templates
