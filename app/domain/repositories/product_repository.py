"""
Product Repository Interface.
Defines specific data access operations for Products.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.product import Product


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def get_by_name(self, name: str) -> Optional[Product]:
        """Get a product by exact name."""
        ...

    def list_all(self) -> List[Product]:
        """Get every product, oldest first."""
        ...

    def search_by_name(self, query: str, limit: int = 100) -> List[Product]:
        """Case-insensitive substring search on the product name."""
        ...

    def add_all(self, products: List[Product]) -> List[Product]:
        """Insert several products in one transaction. Raises on failure."""
        ...
