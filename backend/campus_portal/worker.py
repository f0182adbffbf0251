import asyncio

from celery import Celery
from celery.schedules import crontab

from campus_portal.core.config import settings

celery_app = Celery("campus_portal", broker=settings.redis_url, backend=settings.redis_url)

celery_app.conf.beat_schedule = {
    "reconcile-approval-statuses": {
        "task": "campus_portal.tasks.reconcile_approvals",
        "schedule": crontab(minute="*/30"),  # Every 30 minutes
    },
}


def _run_async(coro):
    """Helper to run async code inside sync Celery tasks."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@celery_app.task(name="campus_portal.tasks.reconcile_approvals")
def task_reconcile_approvals() -> dict:
    """Repair entities whose status drifted from their decided approval."""

    async def _do():
        from campus_portal.core.database import AsyncSessionLocal, engine
        from campus_portal.services.approval_service import reconcile_entity_statuses

        async with AsyncSessionLocal() as db:
            repaired = await reconcile_entity_statuses(db)
            await db.commit()
        # Pooled connections belong to this task's event loop.
        await engine.dispose()
        return {"repaired": repaired}

    return _run_async(_do())
