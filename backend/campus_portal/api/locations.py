from dataclasses import asdict

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.core.database import get_db
from campus_portal.core.errors import NotFound
from campus_portal.schemas.location import ARMarkerRead, ARProjectionRequest, CampusLocationRead
from campus_portal.services import location_service

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=list[CampusLocationRead])
async def list_locations(
    category: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await location_service.list_locations(db, category)


@router.get("/purposes/{purpose}", response_model=CampusLocationRead)
async def location_for_purpose(purpose: str, db: AsyncSession = Depends(get_db)):
    location = await location_service.find_location_for_purpose(db, purpose)
    if location is None:
        raise NotFound("No location found for this purpose")
    return location


@router.post("/ar-projection", response_model=list[ARMarkerRead])
async def ar_projection(body: ARProjectionRequest, db: AsyncSession = Depends(get_db)):
    markers = await location_service.project_for_viewer(db, body.latitude, body.longitude, body.heading)
    return [ARMarkerRead(**asdict(m)) for m in markers]
