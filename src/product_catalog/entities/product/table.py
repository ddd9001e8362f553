"""Product database table model."""

from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


class ProductTable(SQLModel, table=True):
    """Database persistence model for products.

    ``id`` stays ``None`` until the row is first written; the database
    assigns it from the primary key sequence.
    """

    __tablename__ = "product"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    price: Decimal = Field(sa_column=sa.Column(sa.Numeric(19, 2), nullable=False))
