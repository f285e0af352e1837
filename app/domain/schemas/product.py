"""Pydantic schemas for Product, ProductEntry and expiration views."""

from enum import Enum
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class FreshnessTier(str, Enum):
    OK = "OK"
    ATTENTION = "ATTENTION"
    VENCENDO = "VENCENDO"
    VENCIDO = "VENCIDO"


class ProductBase(BaseModel):
    name: str
    code: Optional[str] = None
    category: Optional[str] = None


class ProductCreate(ProductBase):
    pass


class ProductRead(ProductBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProductEntryCreate(BaseModel):
    product_id: int
    expiration_date: date
    quantity: int = Field(1, ge=1)
    notes: Optional[str] = None


class ProductEntryRead(BaseModel):
    id: int
    product_id: int
    expiration_date: date
    quantity: int
    notes: Optional[str] = None
    is_expired: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProductWithExpiration(BaseModel):
    """Read-time join of a product and one of its entries. Never persisted.

    ``status`` follows ``days_remaining`` on every read, while ``is_expired``
    is the flag stored when the entry was created (or marked by hand), so the
    two can disagree for older entries.
    """

    id: int
    name: str
    code: Optional[str] = None
    category: Optional[str] = None
    entry_id: int
    expiration_date: date
    quantity: int
    notes: Optional[str] = None
    is_expired: bool
    days_remaining: int
    status: FreshnessTier


class ExpirationSummary(BaseModel):
    total: int = 0
    valid: int = 0
    expired: int = 0
    ok: int = 0
    attention: int = 0
    vencendo: int = 0
    valid_percentage: float = 0.0
