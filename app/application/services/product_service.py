"""Product service — catalog queries."""

import structlog

from app.config import get_settings
from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository

settings = get_settings()
logger = structlog.get_logger(__name__)


def get_products(repo: ProductRepository) -> list[Product]:
    """Get every product in the catalog."""
    return repo.list_all()


def search_products(repo: ProductRepository, query: str, limit: int | None = None) -> list[Product]:
    """Case-insensitive name search, capped at SEARCH_LIMIT results. Blank query → []."""
    query = (query or "").strip()
    if not query:
        return []

    results = repo.search_by_name(query, limit=limit or settings.SEARCH_LIMIT)
    logger.debug("Product search", query=query, results=len(results))
    return results
