"""Catalog importer — persists parsed catalog candidates.

Products are deduplicated by exact name. New ones are inserted in one batch;
if that batch fails, each product is retried on its own and failures are
logged and left out, so one bad row never rolls back a whole upload.
"""

from dataclasses import dataclass, field
from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.application.services.catalog_parser import ImportDiagnostic, parse_catalog
from app.domain.models.product import Product
from app.domain.models.upload import InventoryUpload
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.upload_repository import UploadRepository
from app.domain.schemas.product import ProductCreate

logger = structlog.get_logger(__name__)

DEFAULT_FILENAME = "estoque.csv"


@dataclass
class ImportResult:
    upload: InventoryUpload
    created: list[Product]
    duplicates: int = 0
    diagnostics: list[ImportDiagnostic] = field(default_factory=list)

    @property
    def products_count(self) -> int:
        return len(self.created)


def split_new_products(
    repo: ProductRepository,
    candidates: list[ProductCreate],
) -> tuple[list[ProductCreate], list[ProductCreate]]:
    """Partition candidates into (to_create, already_existing) by exact name.

    Only names already stored count as existing. Repeats inside the same
    file are all inserted.
    """
    to_create: list[ProductCreate] = []
    existing: list[ProductCreate] = []

    for candidate in candidates:
        if repo.get_by_name(candidate.name) is not None:
            existing.append(candidate)
        else:
            to_create.append(candidate)

    return to_create, existing


def create_products(repo: ProductRepository, candidates: list[ProductCreate], log=None) -> list[Product]:
    """Insert candidates in bulk, falling back to one-by-one inserts on failure."""
    log = log or logger
    if not candidates:
        return []

    try:
        return repo.add_all([Product(**c.model_dump()) for c in candidates])
    except SQLAlchemyError as e:
        repo.rollback()
        log.warning("Bulk product insert failed, retrying one by one", error=str(e), count=len(candidates))

    created: list[Product] = []
    for candidate in candidates:
        try:
            created.append(repo.create(Product(**candidate.model_dump())))
        except SQLAlchemyError as e:
            repo.rollback()
            log.error("Product insert failed", name=candidate.name, code=candidate.code, error=str(e))

    log.info("Individual product inserts finished", created=len(created), attempted=len(candidates))
    return created


def import_products(
    repo: ProductRepository,
    candidates: list[ProductCreate],
    log=None,
) -> tuple[list[Product], int]:
    """Deduplicate and insert. Returns (created products, duplicate count)."""
    log = log or logger
    to_create, existing = split_new_products(repo, candidates)
    log.info("Deduplicated catalog", new=len(to_create), existing=len(existing))
    return create_products(repo, to_create, log=log), len(existing)


def import_catalog(
    text: str,
    product_repo: ProductRepository,
    upload_repo: UploadRepository,
    filename: Optional[str] = None,
    uploaded_by: Optional[str] = None,
    log=None,
) -> ImportResult:
    """
    Parse, deduplicate and insert a CSV catalog, then record the upload.
    The upload's products_count is the number of products actually created.
    """
    log = log or logger.bind(filename=filename or DEFAULT_FILENAME)

    parsed = parse_catalog(text, log=log)
    created, duplicates = import_products(product_repo, parsed.candidates, log=log)

    upload = upload_repo.create(
        {
            "filename": filename or DEFAULT_FILENAME,
            "uploaded_by": uploaded_by,
            "products_count": len(created),
            "status": "active",
        }
    )
    log.info(
        "Catalog imported",
        upload_id=upload.id,
        products_count=len(created),
        duplicates=duplicates,
        skipped=len(parsed.diagnostics),
    )

    return ImportResult(
        upload=upload,
        created=created,
        duplicates=duplicates,
        diagnostics=parsed.diagnostics,
    )
