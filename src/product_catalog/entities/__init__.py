"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Transfer model exposed to callers
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .product import ProductDto, ProductRepository, ProductTable

__all__ = ["ProductDto", "ProductRepository", "ProductTable"]
