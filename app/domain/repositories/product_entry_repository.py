"""
Product Entry Repository Interface.
Defines data access operations for stocked batches.
"""

from typing import List

from app.domain.repositories.base import BaseRepository
from app.domain.models.product_entry import ProductEntry


class ProductEntryRepository(BaseRepository[ProductEntry]):
    """Interface for ProductEntry-specific operations."""

    def list_with_products(self) -> List[ProductEntry]:
        """Get every entry whose product still exists, soonest expiration first."""
        ...

    def set_expired(self, entry: ProductEntry, is_expired: bool = True) -> ProductEntry:
        """Flip the stored expired flag."""
        ...
