"""
Administrative endpoints (guarded by the ``admin_token`` header).

POST /api/v1/admin/invite           - Invite a user by email
GET  /api/v1/admin/user/{userId}     - Onboarding link for a user
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import GuardToken, require_admin
from app.core.config import Settings, get_settings
from app.core.database import get_session
from app.services import invitations as invitation_service
from app.services import users as user_service
from vw_exposure_shared.schemas.users import (
    InviteLinkResponse,
    InviteRequest,
    UserResponse,
)

router = APIRouter()


@router.post("/invite", response_model=UserResponse, tags=["Admin"])
async def invite_user(
    body: InviteRequest,
    _auth: GuardToken = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Invite a user (idempotent per email). Returns the user and, if pending, their link."""
    user = await invitation_service.invite_user(body.email, session, settings)
    _, url = invitation_service.build_invite_link(user, settings)
    return UserResponse(
        id=user.uuid,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        has_master_password=not user.is_placeholder,
        url=url,
    )


@router.get("/user/{userId}", response_model=InviteLinkResponse, tags=["Admin"])
async def get_user_by_id(
    userId: str,
    _auth: GuardToken = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Email and onboarding link for a user. The link is null once the account is set up."""
    user = await user_service.get_user(userId, session)
    email, url = invitation_service.build_invite_link(user, settings)
    return InviteLinkResponse(email=email, url=url)
