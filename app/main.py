"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import AppError, global_exception_handler

# Import all models so SQLAlchemy knows about them
from app.domain.models.product import Product
from app.domain.models.product_entry import ProductEntry
from app.domain.models.upload import InventoryUpload
from app.domain.models.user import User

from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.products import router as products_router
from app.interfaces.api.uploads import router as uploads_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Shelf Life inventory service...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only, use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    from app.application.services.auth_service import ensure_default_admin
    db = SessionLocal()
    try:
        ensure_default_admin(db)
    finally:
        db.close()

    yield

    logger.info("Shelf Life inventory service stopped")


app = FastAPI(
    title="Shelf Life — Controle de Validade",
    description="API Backend — importação de catálogos CSV e monitoramento de validade por lote",
    version="1.0.0",
    lifespan=lifespan,
)

# Correlation ID + request logging
setup_middleware(app)

# AppError is handled inside the app; anything else reaches the outer error middleware
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Added last so it runs first (Starlette executes middleware LIFO)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(products_router)
app.include_router(uploads_router)


@app.get("/")
def root():
    return {
        "name": "Shelf Life",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
