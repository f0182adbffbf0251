from fastapi import APIRouter

from campus_portal.api.approvals import router as approvals_router
from campus_portal.api.directory import router as directory_router
from campus_portal.api.locations import router as locations_router
from campus_portal.api.storage import router as storage_router

router = APIRouter(prefix="/v1")


@router.get("/status", tags=["system"])
async def status() -> dict[str, str]:
    return {"api": "up"}


router.include_router(approvals_router)
router.include_router(directory_router)
router.include_router(locations_router)
router.include_router(storage_router)

api_router = APIRouter()
api_router.include_router(router)
