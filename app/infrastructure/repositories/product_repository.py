"""
SQLAlchemy Implementation of Product Repository.
"""

from typing import List, Optional

from sqlalchemy import func

from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def get_by_name(self, name: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.name == name).first()

    def list_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def search_by_name(self, query: str, limit: int = 100) -> List[Product]:
        """Substring match on the lower-cased name; % and _ match literally."""
        return (
            self.db.query(Product)
            .filter(func.lower(Product.name).contains(query.lower(), autoescape=True))
            .order_by(Product.name)
            .limit(limit)
            .all()
        )

    def add_all(self, products: List[Product]) -> List[Product]:
        self.db.add_all(products)
        self.db.commit()
        for product in products:
            self.db.refresh(product)
        return products
