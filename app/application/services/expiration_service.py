"""Expiration service — freshness tiers, classified views and summary counts.

Tiers by days remaining (first match wins):
- VENCIDO: < 0
- VENCENDO: 0-7
- ATTENTION: 8-15
- OK: > 15

An entry's stored ``is_expired`` flag is taken once at creation time and is
never recomputed; the tier is recomputed on every read. They are reported
side by side and are expected to drift apart as days pass.
"""

from datetime import date, datetime
from typing import Iterable, Optional

import pytz
import structlog

from app.config import get_settings
from app.core.exceptions import EntityNotFoundException
from app.domain.models.product_entry import ProductEntry
from app.domain.repositories.product_entry_repository import ProductEntryRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import (
    ExpirationSummary,
    FreshnessTier,
    ProductEntryCreate,
    ProductWithExpiration,
)

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)
logger = structlog.get_logger(__name__)

VENCENDO_MAX_DAYS = 7
ATTENTION_MAX_DAYS = 15


def get_current_date() -> date:
    """Get current date in the configured timezone."""
    return datetime.now(tz).date()


def days_until(expiration_date: date, today: date) -> int:
    """Whole days from today to the expiration date; negative once past."""
    return (expiration_date - today).days


def classify(days_remaining: int) -> FreshnessTier:
    if days_remaining < 0:
        return FreshnessTier.VENCIDO
    if days_remaining <= VENCENDO_MAX_DAYS:
        return FreshnessTier.VENCENDO
    if days_remaining <= ATTENTION_MAX_DAYS:
        return FreshnessTier.ATTENTION
    return FreshnessTier.OK


def to_view(entry: ProductEntry, today: date) -> ProductWithExpiration:
    product = entry.product
    remaining = days_until(entry.expiration_date, today)
    return ProductWithExpiration(
        id=product.id,
        name=product.name,
        code=product.code,
        category=product.category,
        entry_id=entry.id,
        expiration_date=entry.expiration_date,
        quantity=entry.quantity,
        notes=entry.notes,
        is_expired=entry.is_expired,
        days_remaining=remaining,
        status=classify(remaining),
    )


def summarize(views: Iterable[ProductWithExpiration]) -> ExpirationSummary:
    """Count views per tier. Pure; an empty input gives all zeros."""
    summary = ExpirationSummary()
    for view in views:
        summary.total += 1
        if view.status is FreshnessTier.VENCIDO:
            summary.expired += 1
            continue
        summary.valid += 1
        if view.status is FreshnessTier.OK:
            summary.ok += 1
        elif view.status is FreshnessTier.ATTENTION:
            summary.attention += 1
        else:
            summary.vencendo += 1
    summary.valid_percentage = percentage(summary.valid, summary.total)
    return summary


def percentage(part: int, total: int) -> float:
    """Share of part in total, 0.0 when there is nothing to divide."""
    if total == 0:
        return 0.0
    return round(part * 100 / total, 1)


def get_products_with_expiration(
    repo: ProductEntryRepository,
    today: Optional[date] = None,
) -> list[ProductWithExpiration]:
    today = today or get_current_date()
    return [to_view(entry, today) for entry in repo.list_with_products()]


def get_expiration_summary(repo: ProductEntryRepository, today: Optional[date] = None) -> ExpirationSummary:
    return summarize(get_products_with_expiration(repo, today))


def create_product_entry(
    entry_repo: ProductEntryRepository,
    product_repo: ProductRepository,
    data: ProductEntryCreate,
    today: Optional[date] = None,
) -> ProductEntry:
    """Register a stocked batch. ``is_expired`` is fixed here from today's date."""
    if product_repo.get_by_id(data.product_id) is None:
        raise EntityNotFoundException(
            "Produto não encontrado", details={"product_id": data.product_id}
        )

    today = today or get_current_date()
    entry = entry_repo.create(
        {
            "product_id": data.product_id,
            "expiration_date": data.expiration_date,
            "quantity": data.quantity,
            "notes": data.notes or None,
            "is_expired": data.expiration_date < today,
        }
    )
    logger.info(
        "Product entry created",
        entry_id=entry.id,
        product_id=entry.product_id,
        expiration_date=entry.expiration_date.isoformat(),
        is_expired=entry.is_expired,
    )
    return entry


def mark_entry_expired(repo: ProductEntryRepository, entry_id: int) -> ProductEntry:
    entry = repo.get_by_id(entry_id)
    if entry is None:
        raise EntityNotFoundException(
            "Entrada de produto não encontrada", details={"entry_id": entry_id}
        )
    entry = repo.set_expired(entry, True)
    logger.info("Product entry marked expired", entry_id=entry.id)
    return entry
