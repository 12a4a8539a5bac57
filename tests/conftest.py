from types import SimpleNamespace

import pytest
from langchain_core.documents import Document

from catalog.repository import ProductRepository
from llm.base import BaseLLMClient
from llm.prompts import load_prompt_templates
from retrieval.context import ContextRetriever
from schemas.chat import ChatMessage
from schemas.product import Product
from services.chat_service import ChatService


class FakeVectorStore:
    """Stands in for a langchain VectorStore; records every query."""

    def __init__(self, documents=None, error=None):
        self.documents = documents or []
        self.error = error
        self.calls = []

    async def asimilarity_search_with_relevance_scores(self, query, k=4, **kwargs):
        self.calls.append({"query": query, "k": k, **kwargs})
        if self.error:
            raise self.error
        return [(document, 0.9) for document in self.documents[:k]]


class FakeLLMClient(BaseLLMClient):
    def __init__(self, texts=None, error=None):
        self.texts = texts if texts is not None else ["ok"]
        self.error = error
        self.calls = []

    async def complete(self, messages, toolset=None):
        self.calls.append({"messages": messages, "toolset": toolset})
        if self.error:
            raise self.error
        return list(self.texts)


class FakeMCPClient:
    """Mimics MCPClient's async context manager and tool listing."""

    registry: list = []

    def __init__(self, sse_url, ssl_context=None, connect_timeout=None, request_timeout=None,
                 tools=None, fail_connect=False):
        self.sse_url = sse_url
        self.ssl_context = ssl_context
        self.connect_timeout = connect_timeout
        self.request_timeout = request_timeout
        self.fail_connect = fail_connect
        self.tools = tools if tools is not None else [
            SimpleNamespace(name=f"tool_{len(self.registry)}", description="d", inputSchema={"type": "object"})
        ]
        self.connected = False
        self.closed = False
        self.calls = []
        self.registry.append(self)

    async def __aenter__(self):
        if self.fail_connect:
            raise ConnectionError(f"cannot reach {self.sse_url}")
        self.connected = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.connected = False
        self.closed = True

    async def list_tools(self):
        return self.tools

    async def call_tool(self, name, arguments):
        self.calls.append((name, arguments))
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=f"{name} result")])


@pytest.fixture
def mcp_registry():
    FakeMCPClient.registry = []
    yield FakeMCPClient.registry
    FakeMCPClient.registry = []


def make_client_factory(failing_urls=()):
    def factory(url, **kwargs):
        return FakeMCPClient(url, fail_connect=url in failing_urls, **kwargs)
    return factory


@pytest.fixture
def headphones():
    return Product(
        id="p-100",
        name="HP-100",
        tags=["audio", "wireless"],
        shortDescription="Wireless over-ear headphones.",
        description="HP-100 offers 30 hours of battery life and active noise cancelling.",
    )


@pytest.fixture
def product_repository(headphones):
    return ProductRepository([
        headphones,
        Product(id="p-200", name="HP-200", tags=["audio"], shortDescription="Earbuds.", description="Small earbuds."),
    ])


@pytest.fixture
def documents():
    return [
        Document(page_content="Over-ear, 30h battery.", metadata={"name": "HP-100"}),
        Document(page_content="In-ear, 8h battery.", metadata={"name": "HP-200"}),
    ]


@pytest.fixture
def vector_store(documents):
    return FakeVectorStore(documents)


@pytest.fixture
def llm_client():
    return FakeLLMClient(["Try the HP-100."])


@pytest.fixture
def chat_service(vector_store, product_repository, llm_client, mcp_registry):
    return ChatService(
        retriever=ContextRetriever(vector_store),
        product_repository=product_repository,
        llm_client=llm_client,
        templates=load_prompt_templates(),
        mcp_service_urls=["https://tools-a.example/sse", "https://tools-b.example/sse"],
        mcp_client_factory=make_client_factory(),
    )


def user(content):
    return ChatMessage(role="user", content=content)


def assistant(content):
    return ChatMessage(role="assistant", content=content)
