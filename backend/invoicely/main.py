"""
Invoicely Backend: invoicing and expense tracking API for small businesses.

ARCHITECTURE:
- FastAPI: JSON endpoints under /api, logo files under /uploads
- SQLAlchemy: invoices, line items, expenses, business settings
- Groq LLM: invoice descriptions and expense categories, static fallbacks on failure
- reportlab: invoice PDF export
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from invoicely.api.routes import business_settings, dashboard, expenses, invoices, uploads
from invoicely.core.config import settings
from invoicely.core.exceptions import register_exception_handlers
from invoicely.db.init_db import init_db
from invoicely.services.upload_service import ensure_upload_dir

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
    1. Configure logging
    2. Initialize database tables and the default user
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down")


app = FastAPI(
    title="Invoicely API",
    description="Invoices, expenses and business settings for small businesses.",
    version="0.1.0",
    lifespan=lifespan,
)

# Restrict CORS to known front-end origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin"],
    max_age=600,
    expose_headers=["Content-Type", "Content-Disposition"],
)


@app.middleware("http")
async def add_security_headers(request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


register_exception_handlers(app)

app.include_router(invoices.router, prefix="/api/invoices", tags=["invoices"])
app.include_router(expenses.router, prefix="/api/expenses", tags=["expenses"])
app.include_router(business_settings.router, prefix="/api/business-settings", tags=["business-settings"])
app.include_router(uploads.router, prefix="/api", tags=["uploads"])
app.include_router(dashboard.router, prefix="/api", tags=["dashboard"])

app.mount("/uploads", StaticFiles(directory=str(ensure_upload_dir())), name="uploads")


@app.get("/health")
def health():
    return {"status": "ok"}
