from .annotate import annotate_products, process_results
from .chat_service import ChatService, validate_messages

__all__ = ["ChatService", "annotate_products", "process_results", "validate_messages"]
