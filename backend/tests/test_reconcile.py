"""Tests for the approval/entity status reconciliation pass."""

import uuid

import pytest
from sqlalchemy import select

from campus_portal.models import Club, PendingApproval, Shop
from campus_portal.services.approval_service import find_live_approval, reconcile_entity_statuses


def _pair(model, item_type: str, entity_status: str, approval_status: str, shared_token: bool = True, **entity_fields):
    token = str(uuid.uuid4())
    entity = model(
        id=str(uuid.uuid4()),
        status=entity_status,
        approval_token=token if shared_token else str(uuid.uuid4()),
        **entity_fields,
    )
    approval = PendingApproval(
        item_type=item_type,
        item_id=entity.id,
        submitted_by="user-1",
        faculty_email="prof@inst.edu",
        approval_token=token,
        status=approval_status,
    )
    return entity, approval


@pytest.mark.asyncio
async def test_drifted_entities_are_repaired(db):
    club, club_approval = _pair(Club, "club", "pending", "approved", name="Chess", faculty_coordinator="Dr. K")
    shop, shop_approval = _pair(Shop, "shop", "pending", "rejected", name="Kiosk")
    db.add_all([club, club_approval, shop, shop_approval])
    await db.commit()

    repaired = await reconcile_entity_statuses(db)
    await db.commit()

    assert repaired == 2
    assert (await db.get(Club, club.id)).status == "approved"
    assert (await db.get(Shop, shop.id)).status == "rejected"


@pytest.mark.asyncio
async def test_pending_and_superseded_approvals_are_left_alone(db):
    waiting, waiting_approval = _pair(Club, "club", "pending", "pending", name="Drama", faculty_coordinator="Dr. L")
    resubmitted, old_approval = _pair(
        Club, "club", "pending", "rejected", shared_token=False, name="Film", faculty_coordinator="Dr. M"
    )
    db.add_all([waiting, waiting_approval, resubmitted, old_approval])
    await db.commit()

    assert await reconcile_entity_statuses(db) == 0

    result = await db.execute(select(Club.status).order_by(Club.name))
    assert result.scalars().all() == ["pending", "pending"]


@pytest.mark.asyncio
async def test_find_live_approval_ignores_decided_rows(db):
    club, approval = _pair(Club, "club", "approved", "approved", name="Art", faculty_coordinator="Dr. N")
    db.add_all([club, approval])
    await db.commit()

    assert await find_live_approval(db, approval.approval_token) is None


def test_reconciliation_is_scheduled():
    from campus_portal.worker import celery_app

    entry = celery_app.conf.beat_schedule["reconcile-approval-statuses"]
    assert entry["task"] == "campus_portal.tasks.reconcile_approvals"
    assert entry["task"] in celery_app.tasks
