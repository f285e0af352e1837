"""Product entry (batch) — one stocked quantity with its own expiration date."""

from sqlalchemy import Column, Integer, Text, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class ProductEntry(Base):
    __tablename__ = "product_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    expiration_date = Column(Date, nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)

    # Snapshot taken at creation time; only the "mark expired" action changes it.
    # The live freshness tier is computed on read and may disagree with this flag.
    is_expired = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product", lazy="joined")

    def __repr__(self):
        return f"<ProductEntry {self.product_id} - {self.expiration_date}>"
