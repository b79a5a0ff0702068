# tests/test_conflicts.py
from datetime import date
from types import SimpleNamespace

import pytest

from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.conflicts import find_conflicting_commitments, has_conflict, ranges_overlap

from tests.conftest import GUIDE2_ID, GUIDE_ID, add_commitment


def d(day, month=6):
    return date(2024, month, day)


def test_ranges_sharing_a_boundary_day_overlap():
    assert ranges_overlap(d(1), d(3), d(3), d(5))
    assert ranges_overlap(d(3), d(5), d(1), d(3))


def test_ranges_overlap_when_one_contains_the_other():
    assert ranges_overlap(d(1), d(30), d(10), d(12))
    assert ranges_overlap(d(10), d(12), d(1), d(30))


def test_single_day_ranges():
    assert ranges_overlap(d(4), d(4), d(4), d(4))
    assert not ranges_overlap(d(4), d(4), d(5), d(5))


def test_disjoint_ranges_do_not_overlap():
    assert not ranges_overlap(d(1), d(3), d(4), d(6))
    assert not ranges_overlap(d(4), d(6), d(1), d(3))


class _Store:
    """Returns whatever candidates it was given, like a loose index scan."""

    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    async def find_overlapping(self, guide_id, start_date, end_date):
        self.calls.append((guide_id, start_date, end_date))
        return self.rows


@pytest.mark.asyncio
async def test_find_conflicting_filters_candidates_with_inclusive_rule():
    touching = SimpleNamespace(id=1, start_date=d(3), end_date=d(5))
    later = SimpleNamespace(id=2, start_date=d(10), end_date=d(12))
    store = _Store([touching, later])

    conflicts = await find_conflicting_commitments(store, GUIDE_ID, d(1), d(3))

    assert [c.id for c in conflicts] == [1]
    assert store.calls == [(GUIDE_ID, d(1), d(3))]


@pytest.mark.asyncio
async def test_store_query_uses_inclusive_bounds(session):
    await add_commitment(session, start=d(3), end=d(5))
    store = CommitmentStore(session)

    assert await has_conflict(store, GUIDE_ID, d(1), d(3))
    assert await has_conflict(store, GUIDE_ID, d(5), d(8))
    assert not await has_conflict(store, GUIDE_ID, d(6), d(8))
    assert not await has_conflict(store, GUIDE_ID, d(1), d(2))


@pytest.mark.asyncio
async def test_other_guides_commitments_are_ignored(session):
    await add_commitment(session, guide_id=GUIDE2_ID, start=d(1), end=d(30))

    assert await find_conflicting_commitments(CommitmentStore(session), GUIDE_ID, d(10), d(12)) == []
