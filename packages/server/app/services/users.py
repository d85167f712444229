"""
User lookup service: point lookups and the dashboard status summary.
"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.report import Report
from app.models.user import User
from app.models.user_org import UserOrg
from vw_exposure_shared.schemas.common import UserStatus


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    """Parse an id from a path or body; None when it is not a UUID."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


async def find_user_by_email(email: str, session: AsyncSession) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.email == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def find_user(user_id: str, session: AsyncSession) -> Optional[User]:
    user_uuid = parse_uuid(user_id)
    if user_uuid is None:
        return None
    result = await session.execute(select(User).where(User.uuid == user_uuid))
    return result.scalar_one_or_none()


async def get_user(user_id: str, session: AsyncSession) -> User:
    """Get a user by id; raises 404 if not found."""
    user = await find_user(user_id, session)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def list_member_org_ids(user_uuid: uuid.UUID, session: AsyncSession) -> set[uuid.UUID]:
    result = await session.execute(
        select(UserOrg.org_uuid).where(UserOrg.user_uuid == user_uuid)
    )
    return set(result.scalars().all())


async def summarize_user(user_id: str, session: AsyncSession) -> dict:
    """Activation status, organization size and latest org exposure count.

    A user is treated as belonging to a single organization here: when there
    are several memberships, the one with the lowest organization id is used.
    """
    user = await get_user(user_id, session)

    result = await session.execute(
        select(UserOrg)
        .where(UserOrg.user_uuid == user.uuid)
        .order_by(UserOrg.org_uuid)
        .limit(1)
    )
    membership = result.scalars().first()
    if membership is None:
        return {
            "status": UserStatus.PENDING,
            "org_id": None,
            "members_count": 0,
            "exposed_count": 0,
            "last_updated_at": None,
        }

    result = await session.execute(
        select(func.count())
        .select_from(UserOrg)
        .where(UserOrg.org_uuid == membership.org_uuid)
    )
    members_count = result.scalar_one()

    result = await session.execute(
        select(Report).where(
            Report.org_uuid == membership.org_uuid,
            Report.user_uuid.is_(None),
        )
    )
    report = result.scalar_one_or_none()

    return {
        "status": UserStatus.ACTIVE,
        "org_id": membership.org_uuid,
        "members_count": members_count,
        "exposed_count": report.exposed_count if report else 0,
        "last_updated_at": report.last_updated_at if report else None,
    }
