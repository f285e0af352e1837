"""Pydantic schemas for catalog uploads."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class CatalogUploadRequest(BaseModel):
    csv: Optional[str] = None
    filename: Optional[str] = None


class InventoryUploadRead(BaseModel):
    id: int
    filename: str
    uploaded_by: Optional[str] = None
    products_count: int
    status: str
    uploaded_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ImportDiagnosticRead(BaseModel):
    line: int
    reason: str
    raw: str

    model_config = {"from_attributes": True}


class CatalogUploadResponse(BaseModel):
    message: str
    upload: InventoryUploadRead
    productsCount: int
    duplicates: int = 0
    skipped: list[ImportDiagnosticRead] = []
