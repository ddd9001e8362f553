"""Product API router with CRUD operations."""

from fastapi import APIRouter, Depends, Response, status

from product_catalog.api.http.deps import get_product_service
from product_catalog.core.services import ProductCatalogService
from product_catalog.entities.product import ProductDto

router = APIRouter(prefix="/api/product", tags=["product"])


@router.get("", response_model=list[ProductDto])
def list_products(
    service: ProductCatalogService = Depends(get_product_service),
) -> list[ProductDto]:
    """List all products."""
    return service.list_all()


@router.post("", response_model=ProductDto, status_code=status.HTTP_201_CREATED)
def create_product(
    product: ProductDto,
    service: ProductCatalogService = Depends(get_product_service),
) -> ProductDto:
    """Create a new product; any id in the body is ignored."""
    return service.create(product)


@router.get("/{product_id}", response_model=ProductDto)
def get_product(
    product_id: int,
    service: ProductCatalogService = Depends(get_product_service),
) -> ProductDto:
    """Get a product by ID."""
    return service.get(product_id)


@router.put("", response_model=ProductDto)
def update_product(
    product: ProductDto,
    service: ProductCatalogService = Depends(get_product_service),
) -> ProductDto:
    """Replace name and price of the product identified by ``product.id``."""
    return service.update(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    service: ProductCatalogService = Depends(get_product_service),
) -> Response:
    """Delete a product. Deleting an unknown id succeeds."""
    service.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
