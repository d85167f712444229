"""
Invitation service: placeholder user creation and onboarding links.
"""

from __future__ import annotations

import uuid
from typing import Optional
from urllib.parse import urlencode

import structlog
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import InviteClaims, create_invite_token
from app.core.config import Settings
from app.core.mail import MailError, send_admin_invite
from app.models.invitation import Invitation
from app.models.user import User
from app.services.users import find_user_by_email, normalize_email

log = structlog.get_logger()

# Stands in for the organization and membership of an invite that is not
# tied to a real organization yet.
SENTINEL_ID = uuid.UUID(int=0)


def build_invite_link(user: User, settings: Settings) -> tuple[str, Optional[str]]:
    """Return (email, onboarding_url). The url is None once the account is set up."""
    if not user.is_placeholder:
        return user.email, None

    claims = InviteClaims(
        sub=user.uuid,
        email=user.email,
        org_id=SENTINEL_ID,
        member_id=SENTINEL_ID,
    )
    token = create_invite_token(claims, settings)

    params = [
        ("email", user.email),
        ("organizationName", settings.invitation_org_name),
        ("organizationId", str(SENTINEL_ID)),
        ("organizationUserId", str(SENTINEL_ID)),
        ("token", token),
    ]
    if settings.sso_only_login:
        params.append(("orgUserHasExistingUser", "false"))
    elif user.private_key is not None:
        params.append(("orgUserHasExistingUser", "true"))

    query = urlencode(params)
    if not query:
        raise HTTPException(status_code=500, detail="Failed to build invite URL query parameters")

    return user.email, f"{settings.domain}/#/accept-organization/?{query}"


async def invite_user(email: str, session: AsyncSession, settings: Settings) -> User:
    """Create a placeholder user for ``email`` and notify them, or return the existing user.

    The user row and the pending-invitation record share the request
    transaction. The invitation mail goes out after the flush and before the
    commit, so a mail failure rolls everything back.
    """
    email = normalize_email(email)
    existing = await find_user_by_email(email, session)
    if existing:
        log.info("user.invite_skipped", user_id=str(existing.uuid), reason="exists")
        return existing

    user = User(email=email)
    try:
        session.add(user)
        if not settings.mail_enabled:
            await session.merge(Invitation(email=email))
        await session.flush()
    except IntegrityError:
        # Lost a race against a concurrent invite for the same address.
        await session.rollback()
        existing = await find_user_by_email(email, session)
        if existing:
            log.info("user.invite_skipped", user_id=str(existing.uuid), reason="race")
            return existing
        log.error("user.invite_failed", email=email, reason="integrity")
        raise HTTPException(status_code=500, detail="Error saving user")
    except SQLAlchemyError as exc:
        log.error("user.invite_failed", email=email, error=str(exc))
        raise HTTPException(status_code=500, detail="Error saving user") from exc

    if settings.mail_enabled:
        _, url = build_invite_link(user, settings)
        try:
            await send_admin_invite(user.email, url, settings.invitation_org_name, settings)
        except MailError as exc:
            raise HTTPException(status_code=500, detail="Error sending invitation email") from exc

    log.info(
        "user.invited",
        user_id=str(user.uuid),
        via="mail" if settings.mail_enabled else "invitation_record",
    )
    return user
