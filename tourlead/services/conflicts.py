# tourlead/services/conflicts.py
from __future__ import annotations

from datetime import date
from typing import List

from tourlead.models import Commitment
from tourlead.services.commitment_store import CommitmentStore


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """
    Inclusive overlap test.

    A range ending on the day another starts counts as overlapping, so a
    same-day handoff between two jobs is treated as a conflict.
    """
    return start_a <= end_b and start_b <= end_a


async def find_conflicting_commitments(
    store: CommitmentStore,
    guide_id: str,
    start_date: date,
    end_date: date,
) -> List[Commitment]:
    """Existing commitments of the guide that overlap the candidate range. Read-only."""
    candidates = await store.find_overlapping(guide_id, start_date, end_date)
    return [
        c for c in candidates
        if ranges_overlap(c.start_date, c.end_date, start_date, end_date)
    ]


async def has_conflict(
    store: CommitmentStore,
    guide_id: str,
    start_date: date,
    end_date: date,
) -> bool:
    return bool(await find_conflicting_commitments(store, guide_id, start_date, end_date))
