import logging
import ssl

from catalog.repository import ProductRepository
from core.exceptions import InvalidInputError
from llm.base import BaseLLMClient
from llm.prompts.templates import PromptTemplates
from mcp_integration.client import DEFAULT_CONNECT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, MCPClient
from mcp_integration.toolset import open_toolset
from retrieval.context import ContextRetriever
from schemas.chat import ChatMessage, ChatRole
from schemas.product import Product

from .annotate import process_results

logger = logging.getLogger(__name__)


def validate_messages(messages: list[ChatMessage] | None):
    if not messages:
        raise InvalidInputError("message shouldn't be empty.")
    if messages[0].role != ChatRole.USER:
        raise InvalidInputError("The first message should be in user role.")
    if messages[-1].role != ChatRole.USER:
        raise InvalidInputError("The last message should be in user role.")


class ChatService:
    """
    Answers a conversation with retrieval-grounded context and MCP tools.

    All collaborators are injected at startup and shared read-only between
    requests; the only per-request resources are the MCP clients, which are
    opened and closed inside each ``chat`` call.
    """

    def __init__(
        self,
        retriever: ContextRetriever,
        product_repository: ProductRepository,
        llm_client: BaseLLMClient,
        templates: PromptTemplates,
        mcp_service_urls: list[str] | tuple[str, ...] = (),
        ssl_context: ssl.SSLContext | None = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        mcp_client_factory=MCPClient,
    ):
        self.retriever = retriever
        self.product_repository = product_repository
        self.llm_client = llm_client
        self.templates = templates
        self.mcp_service_urls = tuple(mcp_service_urls)
        self.ssl_context = ssl_context
        self.connect_timeout = connect_timeout
        self.request_timeout = request_timeout
        self.mcp_client_factory = mcp_client_factory

    async def chat(self, messages: list[ChatMessage] | None, product_id: str | None = None) -> list[str]:
        validate_messages(messages)

        product = self.product_repository.get_product_by_id(product_id)
        if product is None:
            return await self._chat_without_product(messages)
        return await self._chat_with_product(product, messages)

    async def _chat_without_product(self, messages: list[ChatMessage]) -> list[str]:
        question = messages[-1].content
        documents = await self.retriever.retrieve(question)

        system_message = self.templates.render_without_product(documents)
        return await self._send_to_ai(system_message, messages)

    async def _chat_with_product(self, product: Product, messages: list[ChatMessage]) -> list[str]:
        logger.info(f"Answering in the context of product {product.id} ({product.name})")
        question = messages[-1].content
        documents = await self.retriever.retrieve(question)

        system_message = self.templates.render_with_product(product, documents)
        return await self._send_to_ai(system_message, messages)

    async def _send_to_ai(self, system_message: dict, messages: list[ChatMessage]) -> list[str]:
        prompt = [system_message]
        prompt.extend({"role": message.role.value, "content": message.content} for message in messages)

        async with open_toolset(
            self.mcp_service_urls,
            ssl_context=self.ssl_context,
            connect_timeout=self.connect_timeout,
            request_timeout=self.request_timeout,
            client_factory=self.mcp_client_factory,
        ) as toolset:
            texts = await self.llm_client.complete(prompt, toolset=toolset)

        return process_results(texts, self.product_repository.get_product_list())
