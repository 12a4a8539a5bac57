from .chat import CHAT_WITH_PRODUCT_PROMPT, CHAT_WITHOUT_PRODUCT_PROMPT
from .templates import PromptTemplates, load_prompt_templates

__all__ = [
    "CHAT_WITH_PRODUCT_PROMPT",
    "CHAT_WITHOUT_PRODUCT_PROMPT",
    "PromptTemplates",
    "load_prompt_templates",
]
