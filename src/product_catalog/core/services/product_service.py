"""Product catalog service: CRUD over products with a write-through cache."""

from loguru import logger

from product_catalog.core.exceptions import ProductNotFoundError
from product_catalog.core.storage.product_cache import ProductCache
from product_catalog.entities.product import ProductDto, ProductRepository, ProductTable


class ProductCatalogService:
    """Orchestrates the product repository and the product cache.

    Every mutating call writes the store first and the cache second, so once
    it returns the cache holds either nothing or exactly what the store holds
    for that id. Collection reads bypass the cache.
    """

    def __init__(self, repository: ProductRepository, cache: ProductCache) -> None:
        self._repository = repository
        self._cache = cache

    def list_all(self) -> list[ProductDto]:
        return [ProductDto.from_row(row) for row in self._repository.find_all()]

    def create(self, product: ProductDto) -> ProductDto:
        """Persist a new product and cache it under its assigned id.

        Any id supplied on ``product`` is ignored.
        """
        saved = self._repository.save(ProductTable(name=product.name, price=product.price))
        created = ProductDto.from_row(saved)
        self._cache.put(created.id, created)
        logger.info("Created product {}", created.id)
        return created

    def get(self, product_id: int) -> ProductDto:
        """Return the product, from the cache when present.

        Raises:
            ProductNotFoundError: no product exists for ``product_id``.
        """
        cached = self._cache.get(product_id)
        if cached is not None:
            logger.debug("Cache hit for product {}", product_id)
            return cached

        logger.debug("Cache miss for product {}", product_id)
        row = self._repository.find_by_id(product_id)
        if row is None:
            raise ProductNotFoundError(product_id)

        product = ProductDto.from_row(row)
        self._cache.put(product_id, product)
        return product

    def update(self, product: ProductDto) -> ProductDto:
        """Replace name and price of an existing product and refresh its cache entry.

        Raises:
            ProductNotFoundError: ``product.id`` is missing or unknown.
        """
        if product.id is None:
            raise ProductNotFoundError(None)

        row = self._repository.find_by_id(product.id)
        if row is None:
            raise ProductNotFoundError(product.id)

        row.name = product.name
        row.price = product.price
        updated = ProductDto.from_row(self._repository.save(row))
        self._cache.put(updated.id, updated)
        logger.info("Updated product {}", updated.id)
        return updated

    def delete(self, product_id: int) -> None:
        """Delete the product and evict its cache entry; unknown ids are a no-op."""
        self._repository.delete_by_id(product_id)
        self._cache.evict(product_id)
        logger.info("Deleted product {}", product_id)
