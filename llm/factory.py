from core.config import Settings
from .base import BaseLLMClient
from .openai_client import OpenAIClient


def get_llm_client(settings: Settings) -> BaseLLMClient:
    """
    Factory function to get the LLM client instance.
    For now, it defaults to OpenAIClient.
    """
    return OpenAIClient(
        api_key=settings.openai_api_key,
        model=settings.llm_model,
        base_url=settings.openai_base_url,
        max_tool_rounds=settings.max_tool_rounds,
    )
