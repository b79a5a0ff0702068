# tourlead/services/__init__.py
"""
Business logic services organized by domain functionality.
"""

from tourlead.services.availability import AvailabilityService
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.conflicts import find_conflicting_commitments, has_conflict, ranges_overlap
from tourlead.services.notifications import ConsoleNotifier, Notifier, ResendNotifier, get_notifier
from tourlead.services.offer_lifecycle import OfferLifecycleController
from tourlead.services.offer_store import OfferStore
from tourlead.services.reputation import ReputationService
from tourlead.services.subscriptions import SubscriptionService

__all__ = [
    # Stores
    "CommitmentStore",
    "OfferStore",
    # Conflicts
    "find_conflicting_commitments",
    "has_conflict",
    "ranges_overlap",
    # Notifications
    "ConsoleNotifier",
    "Notifier",
    "ResendNotifier",
    "get_notifier",
    # Orchestration
    "AvailabilityService",
    "OfferLifecycleController",
    "ReputationService",
    "SubscriptionService",
]
