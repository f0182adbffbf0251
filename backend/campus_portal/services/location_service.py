from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.geo.geodesy import GeoPoint
from campus_portal.geo.projector import Marker, project_markers
from campus_portal.models.location import CampusLocation

# Visit purposes offered by the map, mapped to location categories.
PURPOSE_CATEGORIES = {
    "admission": "administrative",
    "library": "library",
    "canteen": "canteen",
    "sports": "sports",
    "hostel": "hostel",
}


async def list_locations(db: AsyncSession, category: str | None = None) -> list[CampusLocation]:
    stmt = select(CampusLocation).order_by(CampusLocation.name)
    if category:
        stmt = stmt.where(CampusLocation.category == category)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def find_location_for_purpose(db: AsyncSession, purpose: str) -> CampusLocation | None:
    category = PURPOSE_CATEGORIES.get(purpose.strip().lower())
    if category is None:
        return None
    result = await db.execute(
        select(CampusLocation)
        .where(CampusLocation.category == category)
        .order_by(CampusLocation.name)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def project_for_viewer(db: AsyncSession, latitude: float, longitude: float, heading: float) -> list[Marker]:
    locations = await list_locations(db)
    return project_markers(GeoPoint(lat=latitude, lon=longitude), heading, locations)
