from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.main import app_router
from core.logging import setup_logging
import logging

from dotenv import load_dotenv

from catalog.repository import ProductRepository
from core.config import Settings, load_settings
from core.tls import build_ssl_context
from llm.factory import get_llm_client
from llm.prompts import load_prompt_templates
from retrieval.context import ContextRetriever
from retrieval.store import build_vector_store
from services.chat_service import ChatService

# Load env vars
load_dotenv()

logger = logging.getLogger(__name__)


def build_chat_service(settings: Settings) -> ChatService:
    """Wire every collaborator of the chat endpoint. Any failure here is fatal."""
    ssl_context = build_ssl_context(
        insecure=settings.tool_tls_insecure,
        ca_file=settings.tool_tls_ca_file,
    )
    templates = load_prompt_templates(settings.prompt_template_dir)
    product_repository = ProductRepository.from_file(settings.products_file)
    retriever = ContextRetriever(
        build_vector_store(settings),
        top_k=settings.retrieval_top_k,
        similarity_threshold=settings.retrieval_similarity_threshold,
    )
    return ChatService(
        retriever=retriever,
        product_repository=product_repository,
        llm_client=get_llm_client(settings),
        templates=templates,
        mcp_service_urls=settings.mcp_service_urls,
        ssl_context=ssl_context,
        connect_timeout=settings.tool_connect_timeout,
        request_timeout=settings.tool_request_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Application startup: Logging initialized")

    app.state.chat_service = build_chat_service(app.state.settings)
    logger.info(f"Chat service ready with {len(app.state.settings.mcp_service_urls)} MCP services")

    yield

    logger.info("Application shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="ACME Assist", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(app_router)
    return app


app = create_app()
