"""Products API routes — catalog, search, entries and expiration status."""

from fastapi import APIRouter, Depends, Query, status

from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import get_product_repository, get_product_entry_repository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.product_entry_repository import ProductEntryRepository
from app.domain.models.user import User
from app.domain.schemas.product import (
    ExpirationSummary,
    ProductEntryCreate,
    ProductEntryRead,
    ProductRead,
    ProductWithExpiration,
)
from app.application.services.product_service import get_products, search_products
from app.application.services.expiration_service import (
    create_product_entry,
    get_expiration_summary,
    get_products_with_expiration,
    mark_entry_expired,
)

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=list[ProductRead])
def list_products(
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return get_products(repo)


@router.get("/search", response_model=list[ProductRead])
def search(
    q: str = Query("", description="Parte do nome do produto"),
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return search_products(repo, q)


@router.get("/expiration", response_model=list[ProductWithExpiration])
def products_with_expiration(
    repo: ProductEntryRepository = Depends(get_product_entry_repository),
    user: User = Depends(get_current_user),
):
    """Every stocked entry with days remaining and freshness tier as of today."""
    return get_products_with_expiration(repo)


@router.get("/expiration-status", response_model=ExpirationSummary)
def expiration_status(
    repo: ProductEntryRepository = Depends(get_product_entry_repository),
    user: User = Depends(get_current_user),
):
    return get_expiration_summary(repo)


@router.post("/entries", response_model=ProductEntryRead, status_code=status.HTTP_201_CREATED)
def create_entry(
    body: ProductEntryCreate,
    entry_repo: ProductEntryRepository = Depends(get_product_entry_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return create_product_entry(entry_repo, product_repo, body)


@router.patch("/entries/{entry_id}/expired", response_model=ProductEntryRead)
def mark_expired(
    entry_id: int,
    repo: ProductEntryRepository = Depends(get_product_entry_repository),
    user: User = Depends(get_current_user),
):
    return mark_entry_expired(repo, entry_id)
