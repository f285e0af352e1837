"""
Upload Repository Interface.
Defines data access operations for the upload history.
"""

from typing import List

from app.domain.repositories.base import BaseRepository
from app.domain.models.upload import InventoryUpload


class UploadRepository(BaseRepository[InventoryUpload]):
    """Interface for InventoryUpload-specific operations."""

    def list_recent(self, limit: int = 50) -> List[InventoryUpload]:
        """Get the most recent uploads, newest first."""
        ...
