"""
SQLAlchemy Implementation of Product Entry Repository.
"""

from typing import List

from app.domain.models.product import Product
from app.domain.models.product_entry import ProductEntry
from app.domain.repositories.product_entry_repository import ProductEntryRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductEntryRepository(SQLAlchemyRepository[ProductEntry], ProductEntryRepository):
    """ProductEntry repository implementation using SQLAlchemy."""

    def list_with_products(self) -> List[ProductEntry]:
        # Inner join drops entries whose product row is gone
        return (
            self.db.query(ProductEntry)
            .join(Product, ProductEntry.product_id == Product.id)
            .order_by(ProductEntry.expiration_date.asc(), ProductEntry.id.asc())
            .all()
        )

    def set_expired(self, entry: ProductEntry, is_expired: bool = True) -> ProductEntry:
        entry.is_expired = is_expired
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry
