# tourlead/models/__init__.py
"""
SQLAlchemy ORM models for database entities.
"""

from tourlead.models.commitment import Commitment
from tourlead.models.offer import Offer, OfferStatus
from tourlead.models.profile import Admin, Company, Guide
from tourlead.models.subscription import Subscription

__all__ = [
    "Admin",
    "Commitment",
    "Company",
    "Guide",
    "Offer",
    "OfferStatus",
    "Subscription",
]
