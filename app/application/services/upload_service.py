"""Upload service — upload history and decoding of uploaded files."""

import structlog

from app.config import get_settings
from app.core.exceptions import EntityNotFoundException
from app.domain.models.upload import InventoryUpload
from app.domain.repositories.upload_repository import UploadRepository

settings = get_settings()
logger = structlog.get_logger(__name__)

# Brazilian spreadsheet exports are often Latin-1/Windows-1252
CANDIDATE_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes by trying common encodings in order."""
    for encoding in CANDIDATE_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte, so this is only reached if the list changes
    return content.decode("latin-1", errors="replace")


def list_uploads(repo: UploadRepository) -> list[InventoryUpload]:
    return repo.list_recent(limit=settings.UPLOAD_HISTORY_LIMIT)


def delete_upload(repo: UploadRepository, upload_id: int) -> InventoryUpload:
    """Delete an upload record. Products it introduced are kept."""
    upload = repo.delete(upload_id)
    if upload is None:
        raise EntityNotFoundException("Upload não encontrado", details={"upload_id": upload_id})
    logger.info("Upload deleted", upload_id=upload_id, filename=upload.filename)
    return upload
