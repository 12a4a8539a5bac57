from .repository import ProductRepository

__all__ = ["ProductRepository"]
