from .context import ContextRetriever, format_documents

__all__ = ["ContextRetriever", "format_documents"]
