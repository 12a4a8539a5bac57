from .chat import ChatMessage, ChatRequest, ChatResponse, ChatRole
from .product import Product

__all__ = ["ChatMessage", "ChatRequest", "ChatResponse", "ChatRole", "Product"]
