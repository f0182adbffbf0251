"""Approval workflow: issue a reviewer link, decide on it, repair drift.

A submission creates a `PendingApproval` row carrying a random token and
emails the reviewer two links (approve/reject). Following a link lands in
`process_decision`, which consumes the token exactly once.
"""

import uuid
from datetime import datetime, timedelta
from urllib.parse import urlencode

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.core.config import settings
from campus_portal.core.errors import NotFoundOrExpired, UpstreamFailure
from campus_portal.core.security import Caller
from campus_portal.models.approval import PendingApproval
from campus_portal.models.base import utcnow
from campus_portal.models.directory import Club, ReviewStatus, Shop
from campus_portal.schemas.approval import ApprovalEmailRequest, DecisionActionEnum
from campus_portal.services.email_service import EmailDeliveryError, Mailer, OutgoingEmail, render_template
from campus_portal.utils.logging import get_logger

logger = get_logger(__name__)

ENTITY_MODELS = {"club": Club, "shop": Shop}
ITEM_LABELS = {"club": "Club", "shop": "Shop"}

DECISION_STATUS = {
    DecisionActionEnum.APPROVE: ReviewStatus.APPROVED,
    DecisionActionEnum.REJECT: ReviewStatus.REJECTED,
}


def new_approval_token() -> str:
    return str(uuid.uuid4())


def build_decision_links(base_url: str, token: str) -> tuple[str, str]:
    base = base_url.rstrip("/")
    approve = f"{base}/approve?{urlencode({'token': token, 'action': 'approve'})}"
    reject = f"{base}/approve?{urlencode({'token': token, 'action': 'reject'})}"
    return approve, reject


def compose_approval_email(body: ApprovalEmailRequest, approve_url: str, reject_url: str) -> OutgoingEmail:
    item_type = body.item_type.value
    label = ITEM_LABELS[item_type]
    html = render_template(
        "approval_request.html",
        portal_name=settings.app_name,
        item_type=item_type,
        item_label=label,
        item_name=body.item_name,
        submitter_name=body.submitter_name,
        submitter_email=body.submitter_email,
        description=body.description or "",
        approve_url=approve_url,
        reject_url=reject_url,
        expiry_days=settings.approval_expiry_days,
    )
    return OutgoingEmail(
        to=[body.faculty_email],
        subject=f"Approval Request: New {label} - {body.item_name}",
        html=html,
    )


async def _attach_token_to_entity(db: AsyncSession, item_type: str, item_id: str, token: str, caller_id: str) -> bool:
    """Stamp the entity with the token and submitter. Failures are logged, not raised."""
    model = ENTITY_MODELS[item_type]
    try:
        result = await db.execute(
            update(model).where(model.id == item_id).values(approval_token=token, submitted_by=caller_id)
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error updating %s %s with approval token: %s", item_type, item_id, exc)
        return False

    if result.rowcount == 0:
        logger.warning("No %s with id %s to attach approval token to", item_type, item_id)
        return False
    return True


async def request_approval(
    db: AsyncSession,
    body: ApprovalEmailRequest,
    caller: Caller,
    base_url: str,
    mailer: Mailer,
) -> PendingApproval:
    item_type = body.item_type.value
    logger.info("Received approval request: type=%s id=%s", item_type, body.item_id)

    token = new_approval_token()
    approval = PendingApproval(
        item_type=item_type,
        item_id=body.item_id,
        submitted_by=caller.id,
        faculty_email=body.faculty_email,
        approval_token=token,
        status=ReviewStatus.PENDING,
    )
    db.add(approval)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error creating approval record: %s", exc)
        raise UpstreamFailure("Failed to process request. Please try again.") from exc

    await _attach_token_to_entity(db, item_type, body.item_id, token, caller.id)

    approve_url, reject_url = build_decision_links(base_url, token)
    email = compose_approval_email(body, approve_url, reject_url)
    try:
        await mailer.send(email)
    except EmailDeliveryError as exc:
        logger.error("Approval email for %s %s not delivered: %s", item_type, body.item_id, exc)
        raise UpstreamFailure("Failed to send approval email. Please try again.") from exc

    return approval


async def find_live_approval(db: AsyncSession, token: str, now: datetime | None = None) -> PendingApproval | None:
    """Pending row for `token` created inside the expiry window, if any."""
    cutoff = (now or utcnow()) - timedelta(days=settings.approval_expiry_days)
    result = await db.execute(
        select(PendingApproval).where(
            PendingApproval.approval_token == token,
            PendingApproval.status == ReviewStatus.PENDING,
            PendingApproval.created_at >= cutoff,
        )
    )
    return result.scalar_one_or_none()


async def process_decision(db: AsyncSession, token: str, action: DecisionActionEnum) -> str:
    """Apply approve/reject to the approval row and its entity in one transaction."""
    try:
        approval = await find_live_approval(db, token)
    except SQLAlchemyError as exc:
        logger.error("Error finding approval: %s", exc)
        raise UpstreamFailure() from exc

    if approval is None:
        raise NotFoundOrExpired()

    new_status = DECISION_STATUS[action]
    # Rollback expires loaded rows; keep plain copies for logging.
    approval_id, item_type, item_id = approval.id, approval.item_type, approval.item_id
    model = ENTITY_MODELS[item_type]
    try:
        claimed = await db.execute(
            update(PendingApproval)
            .where(PendingApproval.id == approval_id, PendingApproval.status == ReviewStatus.PENDING)
            .values(status=new_status)
        )
        if claimed.rowcount != 1:
            # Another request consumed the token first.
            await db.rollback()
            raise NotFoundOrExpired()

        await db.execute(update(model).where(model.id == item_id).values(status=new_status))
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error applying %s to %s %s: %s", new_status, item_type, item_id, exc)
        raise UpstreamFailure() from exc

    logger.info("Successfully %s %s %s", new_status, item_type, item_id)
    return f"{ITEM_LABELS[item_type]} has been {new_status}"


async def reconcile_entity_statuses(db: AsyncSession) -> int:
    """Copy decided approval statuses onto entities still carrying the same token.

    Returns the number of entities repaired. The caller commits.
    """
    repaired = 0
    for item_type, model in ENTITY_MODELS.items():
        result = await db.execute(
            select(PendingApproval, model)
            .join(model, model.id == PendingApproval.item_id)
            .where(
                PendingApproval.item_type == item_type,
                PendingApproval.status != ReviewStatus.PENDING,
                model.approval_token == PendingApproval.approval_token,
                model.status != PendingApproval.status,
            )
        )
        for approval, entity in result.all():
            logger.warning(
                "Repairing %s %s: status %s -> %s", item_type, entity.id, entity.status, approval.status
            )
            entity.status = approval.status
            repaired += 1

    if repaired:
        await db.flush()
    return repaired
