"""
API v1 Router

Administrative routes live under /admin, system-integration routes under
/system. Exposure reports are accepted at the root.
"""

from fastapi import APIRouter

from . import admin, reports, system

router = APIRouter()

router.include_router(admin.router, prefix="/admin")
router.include_router(system.router, prefix="/system")
router.include_router(reports.router)


@router.get("/", tags=["API"])
async def api_root():
    """API root: returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/admin/invite",
            "/admin/user/{userId}",
            "/system/invite",
            "/system/user/{userId}/details",
            "/exposed",
        ],
    }
