from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.core.database import get_db
from campus_portal.core.security import Caller, get_current_caller
from campus_portal.schemas.directory import ClubCreate, ClubRead, ShopCreate, ShopRead
from campus_portal.services import directory_service

router = APIRouter(tags=["directory"])


@router.get("/clubs", response_model=list[ClubRead])
async def list_clubs(
    status_filter: str | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    return await directory_service.list_clubs(db, status_filter)


@router.post("/clubs", response_model=ClubRead, status_code=status.HTTP_201_CREATED)
async def create_club(
    body: ClubCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
):
    return await directory_service.create_club(db, body.model_dump(), caller.id)


@router.get("/shops", response_model=list[ShopRead])
async def list_shops(
    status_filter: str | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    return await directory_service.list_shops(db, status_filter)


@router.post("/shops", response_model=ShopRead, status_code=status.HTTP_201_CREATED)
async def create_shop(
    body: ShopCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
):
    return await directory_service.create_shop(db, body.model_dump(), caller.id)
