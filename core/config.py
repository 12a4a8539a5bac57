import json
import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Credential key an MCP service binding exposes in VCAP_SERVICES
MCP_SERVICE_URL_KEY = "mcpServiceURL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    llm_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"
    max_tool_rounds: int = 5

    mcp_service_urls: tuple[str, ...] = ()
    tool_tls_insecure: bool = False
    tool_tls_ca_file: str | None = None
    tool_connect_timeout: float = 30.0
    tool_request_timeout: float = 30.0

    products_file: str = "data/products.json"
    vector_store_dir: str | None = None
    vector_store_collection: str = "acme_products"
    prompt_template_dir: str | None = None
    retrieval_top_k: int = 5
    retrieval_similarity_threshold: float = 0.4

    cors_allow_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _get_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be a {cast.__name__}, got {raw!r}") from None


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def discover_mcp_service_urls(vcap_services: str | None) -> list[str]:
    """
    Collect MCP endpoint URLs from the Cloud Foundry ``VCAP_SERVICES`` payload.

    Every bound service whose credentials carry ``mcpServiceURL`` contributes
    one address, in binding order.
    """
    if not vcap_services:
        return []
    try:
        services = json.loads(vcap_services)
    except json.JSONDecodeError as e:
        raise ConfigError(f"VCAP_SERVICES is not valid JSON: {e}") from e
    if not isinstance(services, dict):
        raise ConfigError("VCAP_SERVICES must be a JSON object")

    urls = []
    for instances in services.values():
        for instance in instances or []:
            credentials = instance.get("credentials") or {}
            url = credentials.get(MCP_SERVICE_URL_KEY)
            if url:
                urls.append(url)
    return urls


def load_settings() -> Settings:
    """Read the deployment environment once, at startup."""
    load_dotenv()

    urls = []
    for url in _split_csv(os.getenv("MCP_SERVICE_URLS")) + discover_mcp_service_urls(os.getenv("VCAP_SERVICES")):
        if url not in urls:
            urls.append(url)
            logger.info(f"Bound to MCP Service: {url}")
    if not urls:
        logger.warning("No MCP services configured; chat will run without tools")

    settings = Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
        llm_model=os.getenv("LLM_MODEL", Settings.llm_model),
        embedding_model=os.getenv("EMBEDDING_MODEL", Settings.embedding_model),
        max_tool_rounds=_get_number("MAX_TOOL_ROUNDS", Settings.max_tool_rounds, int),
        mcp_service_urls=tuple(urls),
        tool_tls_insecure=_get_bool("TOOL_TLS_INSECURE", False),
        tool_tls_ca_file=os.getenv("TOOL_TLS_CA_FILE") or None,
        tool_connect_timeout=_get_number("TOOL_CONNECT_TIMEOUT", Settings.tool_connect_timeout, float),
        tool_request_timeout=_get_number("TOOL_REQUEST_TIMEOUT", Settings.tool_request_timeout, float),
        products_file=os.getenv("PRODUCTS_FILE", Settings.products_file),
        vector_store_dir=os.getenv("VECTOR_STORE_DIR") or None,
        vector_store_collection=os.getenv("VECTOR_STORE_COLLECTION", Settings.vector_store_collection),
        prompt_template_dir=os.getenv("PROMPT_TEMPLATE_DIR") or None,
        retrieval_top_k=_get_number("RETRIEVAL_TOP_K", Settings.retrieval_top_k, int),
        retrieval_similarity_threshold=_get_number(
            "RETRIEVAL_SIMILARITY_THRESHOLD", Settings.retrieval_similarity_threshold, float
        ),
        cors_allow_origins=tuple(_split_csv(os.getenv("CORS_ALLOW_ORIGINS", "*"))),
    )

    if settings.max_tool_rounds < 0:
        raise ConfigError("MAX_TOOL_ROUNDS must not be negative")
    if settings.tool_connect_timeout <= 0:
        raise ConfigError("TOOL_CONNECT_TIMEOUT must be positive")
    if settings.tool_request_timeout <= 0:
        raise ConfigError("TOOL_REQUEST_TIMEOUT must be positive")
    if settings.retrieval_top_k <= 0:
        raise ConfigError("RETRIEVAL_TOP_K must be positive")
    if not 0.0 <= settings.retrieval_similarity_threshold <= 1.0:
        raise ConfigError("RETRIEVAL_SIMILARITY_THRESHOLD must be between 0 and 1")
    return settings
