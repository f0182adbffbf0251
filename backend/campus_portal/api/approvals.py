from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.core.config import settings
from campus_portal.core.database import get_db
from campus_portal.core.errors import RateLimited, ValidationError
from campus_portal.core.rate_limit import RateLimiter
from campus_portal.core.security import Caller, get_current_caller
from campus_portal.schemas.approval import (
    ApprovalDecisionRequest,
    ApprovalDecisionResult,
    ApprovalEmailRequest,
    ApprovalRequestResult,
)
from campus_portal.services import approval_service
from campus_portal.services.email_service import Mailer, get_mailer
from campus_portal.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/approvals", tags=["approvals"])


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    return first or "unknown"


async def _parse_body(request: Request, schema: type[BaseModel]) -> Any:
    # Parsed by hand so that rate limiting runs before validation and every
    # failure collapses into the same generic 400.
    try:
        data = await request.json()
    except ValueError:
        logger.info("Validation failed: body is not JSON")
        raise ValidationError()
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        logger.info("Validation failed for %s: %s", schema.__name__, fields)
        raise ValidationError() from exc


@router.post("/request", response_model=ApprovalRequestResult)
async def send_approval_email(
    request: Request,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
    mailer: Mailer = Depends(get_mailer),
):
    body: ApprovalEmailRequest = await _parse_body(request, ApprovalEmailRequest)
    base_url = request.headers.get("origin") or settings.public_base_url
    await approval_service.request_approval(db, body, caller, base_url, mailer)
    return ApprovalRequestResult()


@router.post("/decision", response_model=ApprovalDecisionResult)
async def process_approval(
    request: Request,
    db: AsyncSession = Depends(get_db),
    limiter: RateLimiter = Depends(get_rate_limiter),
):
    key = client_key(request)
    if not await limiter.check_and_record(key):
        logger.warning("Rate limit exceeded for %s", key)
        raise RateLimited()

    body: ApprovalDecisionRequest = await _parse_body(request, ApprovalDecisionRequest)
    logger.info("Processing approval decision from %s", key)
    message = await approval_service.process_decision(db, body.token, body.action)
    return ApprovalDecisionResult(message=message)
