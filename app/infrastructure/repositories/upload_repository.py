"""
SQLAlchemy Implementation of Upload Repository.
"""

from typing import List

from app.domain.models.upload import InventoryUpload
from app.domain.repositories.upload_repository import UploadRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUploadRepository(SQLAlchemyRepository[InventoryUpload], UploadRepository):
    """InventoryUpload repository implementation using SQLAlchemy."""

    def list_recent(self, limit: int = 50) -> List[InventoryUpload]:
        return (
            self.db.query(InventoryUpload)
            .order_by(InventoryUpload.uploaded_at.desc(), InventoryUpload.id.desc())
            .limit(limit)
            .all()
        )
