"""Catalog errors.

``ProductNotFoundError`` is the only domain error. It propagates out of the
catalog service unchanged; the HTTP layer and the CLI translate it.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class ProductNotFoundError(CatalogError):
    """No product exists for the requested identifier."""

    def __init__(self, product_id: int | None) -> None:
        self.product_id = product_id
        super().__init__(f"Cannot find product with id {product_id}")


class CacheBackendError(CatalogError):
    """The cache backend could not be reached or returned an error."""
