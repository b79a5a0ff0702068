# tourlead/routes/__init__.py
"""
API route handlers organized by domain.
"""

from tourlead.routes.availability import router as availability_router
from tourlead.routes.commitments import router as commitments_router
from tourlead.routes.health import router as health_router
from tourlead.routes.offers import router as offers_router
from tourlead.routes.subscriptions import router as subscriptions_router

__all__ = [
    "availability_router",
    "commitments_router",
    "health_router",
    "offers_router",
    "subscriptions_router",
]
