from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.models.directory import Club, ReviewStatus, Shop


async def list_clubs(db: AsyncSession, status_filter: str | None = None) -> list[Club]:
    stmt = select(Club).order_by(Club.name)
    if status_filter:
        stmt = stmt.where(Club.status == status_filter)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_club(db: AsyncSession, data: dict[str, Any], submitted_by: str) -> Club:
    club = Club(**data, status=ReviewStatus.PENDING, submitted_by=submitted_by)
    db.add(club)
    await db.flush()
    await db.refresh(club)
    return club


async def list_shops(db: AsyncSession, status_filter: str | None = None) -> list[Shop]:
    stmt = select(Shop).order_by(Shop.name)
    if status_filter:
        stmt = stmt.where(Shop.status == status_filter)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_shop(db: AsyncSession, data: dict[str, Any], submitted_by: str) -> Shop:
    shop = Shop(**data, status=ReviewStatus.PENDING, submitted_by=submitted_by)
    db.add(shop)
    await db.flush()
    await db.refresh(shop)
    return shop
