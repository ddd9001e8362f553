"""Entity: ProductDto."""

from decimal import Decimal
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    SerializationInfo,
)

# Serialization context key: keep the price as an exact decimal string in JSON.
EXACT_PRICE = "exact_price"


def _serialize_price(value: Decimal, info: SerializationInfo) -> float | str:
    if info.context and info.context.get(EXACT_PRICE):
        return str(value)
    return float(value)


# Exact in memory and in the cache, a plain JSON number on the wire.
Price = Annotated[Decimal, PlainSerializer(_serialize_price, when_used="json")]


class ProductDto(BaseModel):
    """Transfer value for a product.

    This is the only product shape crossing the service boundary; the
    ``ProductTable`` persistence model never leaves the repository layer.
    ``id`` is ``None`` on input for creation and always set on output.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(default=None, description="Product identifier")
    name: str = Field(description="Product name")
    price: Price = Field(description="Product price")

    @classmethod
    def from_row(cls, row) -> "ProductDto":
        return cls(id=row.id, name=row.name, price=row.price)
