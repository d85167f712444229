"""Invitation and user lookup schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr

from .common import CamelModel, UserStatus


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class InviteRequest(CamelModel):
    """Invite a new (placeholder) user by email."""
    email: EmailStr


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class UserResponse(CamelModel):
    """User projection returned by the administrative invite."""
    id: UUID
    email: str
    name: str = ""
    created_at: datetime
    has_master_password: bool = False
    url: Optional[str] = None  # Onboarding link, placeholders only


class InviteLinkResponse(CamelModel):
    email: Optional[str] = None
    url: Optional[str] = None


class SystemInviteResponse(CamelModel):
    user_id: UUID


class UserDetailsResponse(CamelModel):
    """Dashboard view of a user's activation and exposure state."""
    status: UserStatus
    org_id: Optional[UUID] = None
    members_count: int = 0
    exposed_count: int = 0
    last_updated_at: Optional[datetime] = None
