"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.domain.models.product import Product
from app.domain.models.product_entry import ProductEntry
from app.domain.models.upload import InventoryUpload
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.product_entry_repository import ProductEntryRepository
from app.domain.repositories.upload_repository import UploadRepository
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.product_entry_repository import SQLAlchemyProductEntryRepository
from app.infrastructure.repositories.upload_repository import SQLAlchemyUploadRepository


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db, Product)


def get_product_entry_repository(db: Session = Depends(get_db)) -> ProductEntryRepository:
    """Get product entry repository instance."""
    return SQLAlchemyProductEntryRepository(db, ProductEntry)


def get_upload_repository(db: Session = Depends(get_db)) -> UploadRepository:
    """Get upload repository instance."""
    return SQLAlchemyUploadRepository(db, InventoryUpload)
