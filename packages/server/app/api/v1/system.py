"""
System-integration endpoints (guarded by the ``x-vaultwarden-api`` header).

POST /api/v1/system/invite                 - Invite a user by email
GET  /api/v1/system/user/{userId}/details   - Activation and exposure summary
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import GuardToken, require_system
from app.core.config import Settings, get_settings
from app.core.database import get_session
from app.services import invitations as invitation_service
from app.services import users as user_service
from vw_exposure_shared.schemas.users import (
    InviteRequest,
    SystemInviteResponse,
    UserDetailsResponse,
)

router = APIRouter()


@router.post("/invite", response_model=SystemInviteResponse, tags=["System"])
async def invite_user(
    body: InviteRequest,
    _auth: GuardToken = Depends(require_system),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    user = await invitation_service.invite_user(body.email, session, settings)
    return SystemInviteResponse(user_id=user.uuid)


@router.get("/user/{userId}/details", response_model=UserDetailsResponse, tags=["System"])
async def get_user_details(
    userId: str,
    _auth: GuardToken = Depends(require_system),
    session: AsyncSession = Depends(get_session),
):
    """Dashboard summary: status, organization size and latest exposure count."""
    summary = await user_service.summarize_user(userId, session)
    return UserDetailsResponse(**summary)
