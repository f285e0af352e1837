"""Upload history — one record per successful catalog import."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class InventoryUpload(Base):
    __tablename__ = "inventory_uploads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(500), nullable=False)
    uploaded_by = Column(String(255), nullable=True)
    products_count = Column(Integer, nullable=False, default=0)  # newly created, not file rows
    status = Column(String(50), nullable=False, default="active")  # active, archived
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<InventoryUpload {self.filename} - {self.products_count} products>"
