"""Entity package: Product."""

from .entity import EXACT_PRICE, ProductDto
from .repository import ProductRepository
from .table import ProductTable

__all__ = ["EXACT_PRICE", "ProductDto", "ProductRepository", "ProductTable"]
