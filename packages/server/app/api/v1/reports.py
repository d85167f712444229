"""
Exposure report endpoint.

POST /api/v1/exposed  - Submit exposed-credential counts for a user and their orgs
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.services import reports as report_service
from vw_exposure_shared.schemas.reports import ExposureReportRequest

router = APIRouter()


@router.post("/exposed", status_code=200, tags=["Reports"])
async def report_exposed(
    body: ExposureReportRequest,
    session: AsyncSession = Depends(get_session),
):
    """Record counts. Unknown users and non-member orgs are ignored."""
    await report_service.report_exposure(body.user_id, body.me, body.org, session)
    return Response(status_code=200)
