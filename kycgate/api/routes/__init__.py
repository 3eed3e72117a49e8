"""API route modules."""

from kycgate.api.routes.companies import router as companies_router
from kycgate.api.routes.documents import router as documents_router
from kycgate.api.routes.health import router as health_router
from kycgate.api.routes.requirements import router as requirements_router

__all__ = [
    "health_router",
    "requirements_router",
    "companies_router",
    "documents_router",
]
