"""Product repository for data access operations."""

from sqlmodel import Session, select

from .table import ProductTable


class ProductRepository:
    """Data-access layer for products.

    Every write commits immediately so the caller can rely on the row being
    durable (and its identifier assigned) once the method returns.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_all(self) -> list[ProductTable]:
        statement = select(ProductTable).order_by(ProductTable.id)
        return list(self._session.exec(statement).all())

    def find_by_id(self, product_id: int) -> ProductTable | None:
        return self._session.get(ProductTable, product_id)

    def save(self, product: ProductTable) -> ProductTable:
        """Insert ``product`` when it has no id, otherwise overwrite the stored row."""
        if product.id is not None:
            product = self._session.merge(product)
        self._session.add(product)
        self._session.commit()
        self._session.refresh(product)
        return product

    def delete_by_id(self, product_id: int) -> None:
        """Delete the product if present; missing ids are ignored."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.commit()

    def delete_all(self) -> None:
        for row in self._session.exec(select(ProductTable)).all():
            self._session.delete(row)
        self._session.commit()
