"""Import a CSV catalog file straight into the configured database.

Usage: python scripts/import_catalog.py estoque.csv [--uploaded-by email]
"""

import argparse
import os
import sys

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.exceptions import CatalogFormatError
from app.core.logging import configure_logging
from app.domain.models.product import Product
from app.domain.models.product_entry import ProductEntry  # registers the table
from app.domain.models.upload import InventoryUpload
from app.infrastructure.database import Base, SessionLocal, engine
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.upload_repository import SQLAlchemyUploadRepository
from app.application.services.catalog_importer import import_catalog
from app.application.services.upload_service import decode_upload


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Importa um catálogo CSV de produtos.")
    parser.add_argument("path", help="Arquivo .csv/.txt exportado do sistema do fornecedor")
    parser.add_argument("--uploaded-by", default="cli", help="Quem está importando")
    args = parser.parse_args(argv)

    configure_logging()
    Base.metadata.create_all(bind=engine)

    with open(args.path, "rb") as f:
        text = decode_upload(f.read())

    db = SessionLocal()
    try:
        result = import_catalog(
            text,
            SQLAlchemyProductRepository(db, Product),
            SQLAlchemyUploadRepository(db, InventoryUpload),
            filename=os.path.basename(args.path),
            uploaded_by=args.uploaded_by,
        )
    except CatalogFormatError as e:
        print(f"Arquivo rejeitado: {e.message}")
        return 1
    finally:
        db.close()

    print(f"Produtos criados: {result.products_count}")
    print(f"Já existentes: {result.duplicates}")
    print(f"Linhas ignoradas: {len(result.diagnostics)}")
    for d in result.diagnostics:
        print(f"  linha {d.line}: {d.reason.value} ({d.raw})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
