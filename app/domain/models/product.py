"""Product domain model — maps to the 'products' table."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Name is the deduplication key; no unique constraint (concurrent uploads may race)
    name = Column(String(500), nullable=False, index=True)
    code = Column(String(100), nullable=True, index=True)
    # Free text; vendor files store "Quantidade: <n>" here
    category = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Product {self.code} - {self.name}>"
