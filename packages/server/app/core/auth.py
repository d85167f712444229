"""
Authentication and token signing for the exposure service.

Supports:
- Static shared-secret guards (administrative and system-integration)
- Invite JWT creation and verification
"""

from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from fastapi import Depends, HTTPException, Request
from pydantic import BaseModel

from app.core.config import Settings, get_settings

log = structlog.get_logger()

ADMIN_TOKEN_HEADER = "admin_token"
SYSTEM_TOKEN_HEADER = "x-vaultwarden-api"

# ---------------------------------------------------------------------------
# Static-secret guards
# ---------------------------------------------------------------------------


class GuardToken:
    """Proof that a request passed a shared-secret guard."""

    def __init__(self, scope: str):
        self.scope = scope


class StaticSecretGuard:
    """FastAPI dependency comparing one request header against one configured secret.

    ``secret_setting`` names the ``Settings`` attribute holding the expected
    value. Each instance only ever reads its own header, so the admin and
    system guards cannot satisfy each other.
    """

    def __init__(self, scope: str, header_name: str, secret_setting: str):
        self.scope = scope
        self.header_name = header_name
        self.secret_setting = secret_setting

    def check(self, presented: Optional[str], settings: Settings) -> GuardToken:
        if not presented:
            log.info("guard.rejected", scope=self.scope, reason="missing")
            raise HTTPException(status_code=401, detail=f"Missing {self.header_name} header")

        expected: Optional[str] = getattr(settings, self.secret_setting)
        if not expected:
            log.error("guard.not_configured", scope=self.scope)
            raise HTTPException(status_code=500, detail=f"{self.header_name} not configured")

        if not secrets.compare_digest(presented.encode(), expected.encode()):
            log.info("guard.rejected", scope=self.scope, reason="mismatch")
            raise HTTPException(status_code=401, detail=f"Invalid {self.header_name}")

        return GuardToken(self.scope)

    async def __call__(
        self, request: Request, settings: Settings = Depends(get_settings)
    ) -> GuardToken:
        return self.check(request.headers.get(self.header_name), settings)


require_admin = StaticSecretGuard("admin", ADMIN_TOKEN_HEADER, "admin_token")
require_system = StaticSecretGuard("system", SYSTEM_TOKEN_HEADER, "system_api_token")


# ---------------------------------------------------------------------------
# Invite JWT
# ---------------------------------------------------------------------------


class InviteClaims(BaseModel):
    """Claims carried by an organization invite token."""

    sub: uuid.UUID
    email: str
    org_id: uuid.UUID
    member_id: uuid.UUID
    invited_by_email: Optional[str] = None


def create_invite_token(
    claims: InviteClaims,
    settings: Settings,
    *,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign an invite token. Without ``expires_delta`` the configured invitation window applies."""
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(hours=settings.invitation_expiration_hours))
    payload = {
        "nbf": now,
        "exp": exp,
        "iss": settings.invite_issuer,
        "sub": str(claims.sub),
        "email": claims.email,
        "org_id": str(claims.org_id),
        "member_id": str(claims.member_id),
        "invited_by_email": claims.invited_by_email,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_invite_token(token: str, settings: Settings) -> InviteClaims:
    """Verify and decode an invite token. Raises jwt.PyJWTError on failure."""
    payload = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.invite_issuer,
    )
    return InviteClaims.model_validate(payload)
