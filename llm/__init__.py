from .base import BaseLLMClient
from .factory import get_llm_client
from .openai_client import OpenAIClient

__all__ = ["BaseLLMClient", "OpenAIClient", "get_llm_client"]
