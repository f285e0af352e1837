"""Upload API routes — import CSV catalogs and manage upload history."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import AppError
from app.interfaces.deps import get_product_repository, get_upload_repository
from app.interfaces.api.deps import get_current_user, require_admin
from app.domain.models.user import User
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.upload_repository import UploadRepository
from app.domain.schemas.upload import (
    CatalogUploadRequest,
    CatalogUploadResponse,
    ImportDiagnosticRead,
    InventoryUploadRead,
)
from app.application.services.catalog_importer import ImportResult, import_catalog
from app.application.services.upload_service import decode_upload, delete_upload, list_uploads

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/uploads", tags=["Uploads"])

ALLOWED_EXTENSIONS = ("csv", "txt", "tsv")


def _run_import(
    text: str,
    filename: Optional[str],
    user: User,
    product_repo: ProductRepository,
    upload_repo: UploadRepository,
) -> CatalogUploadResponse:
    try:
        result = import_catalog(
            text,
            product_repo,
            upload_repo,
            filename=filename,
            uploaded_by=user.email,
        )
    except AppError:
        raise
    except Exception as e:
        logger.exception("Catalog import failed", filename=filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Erro ao processar arquivo CSV: {str(e)}",
        ) from e

    return _to_response(result)


def _to_response(result: ImportResult) -> CatalogUploadResponse:
    return CatalogUploadResponse(
        message=f"Upload de estoque concluído: {result.products_count} produtos importados",
        upload=InventoryUploadRead.model_validate(result.upload),
        productsCount=result.products_count,
        duplicates=result.duplicates,
        skipped=[
            ImportDiagnosticRead(line=d.line, reason=d.reason.value, raw=d.raw)
            for d in result.diagnostics
        ],
    )


@router.post("", response_model=CatalogUploadResponse, status_code=status.HTTP_201_CREATED)
def upload_catalog(
    body: Optional[CatalogUploadRequest] = None,
    product_repo: ProductRepository = Depends(get_product_repository),
    upload_repo: UploadRepository = Depends(get_upload_repository),
    user: User = Depends(require_admin),
):
    """Import a catalog sent as raw CSV text: ``{"csv": "...", "filename": "..."}``."""
    if body is None or not body.csv or not body.csv.strip():
        raise HTTPException(status_code=400, detail="Dados CSV não fornecidos")

    return _run_import(body.csv, body.filename, user, product_repo, upload_repo)


@router.post("/file", response_model=CatalogUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_catalog_file(
    file: UploadFile = File(...),
    product_repo: ProductRepository = Depends(get_product_repository),
    upload_repo: UploadRepository = Depends(get_upload_repository),
    user: User = Depends(require_admin),
):
    """Import a catalog sent as a multipart .csv file."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="Arquivo não informado")

    ext = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Apenas arquivos .csv, .txt e .tsv são aceitos")

    text = decode_upload(await file.read())
    if not text.strip():
        raise HTTPException(status_code=400, detail="Dados CSV não fornecidos")

    # Blocking DB work runs in the threadpool
    return await run_in_threadpool(_run_import, text, file.filename, user, product_repo, upload_repo)


@router.get("", response_model=list[InventoryUploadRead])
def upload_history(
    repo: UploadRepository = Depends(get_upload_repository),
    user: User = Depends(get_current_user),
):
    return list_uploads(repo)


@router.delete("/{upload_id}")
def remove_upload(
    upload_id: int,
    repo: UploadRepository = Depends(get_upload_repository),
    user: User = Depends(require_admin),
):
    """Delete an upload record. Products it created stay in the catalog."""
    upload = delete_upload(repo, upload_id)
    return {"message": f"Upload '{upload.filename}' excluído com sucesso"}
