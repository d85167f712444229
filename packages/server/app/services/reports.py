"""
Exposure report service: per-user and per-organization exposed-credential counts.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from fastapi import HTTPException
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import utcnow
from app.models.report import Report, clamp_exposed_count
from app.services.users import find_user, list_member_org_ids, parse_uuid

log = structlog.get_logger()


async def _upsert_report(
    session: AsyncSession,
    exposed_count: int,
    *,
    user_uuid: Optional[uuid.UUID] = None,
    org_uuid: Optional[uuid.UUID] = None,
) -> None:
    """Create or overwrite the report for one user or one org in a single statement.

    The conflict target is the UNIQUE owner column, so two concurrent
    reports for the same key cannot both insert.
    """
    table = Report.__table__
    now = utcnow()
    values = {
        "uuid": uuid.uuid4(),
        "user_uuid": user_uuid,
        "org_uuid": org_uuid,
        "exposed_count": clamp_exposed_count(exposed_count),
        "created_at": now,
        "last_updated_at": now,
    }
    owner_column = table.c.user_uuid if user_uuid is not None else table.c.org_uuid

    dialect = session.get_bind().dialect.name
    if dialect in ("postgresql", "sqlite"):
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        stmt = insert(table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[owner_column],
            set_={
                "exposed_count": stmt.excluded.exposed_count,
                "last_updated_at": stmt.excluded.last_updated_at,
            },
        )
    elif dialect in ("mysql", "mariadb"):
        stmt = mysql_insert(table).values(**values)
        stmt = stmt.on_duplicate_key_update(
            exposed_count=stmt.inserted.exposed_count,
            last_updated_at=stmt.inserted.last_updated_at,
        )
    else:
        raise NotImplementedError(f"Report upsert not supported on {dialect}")

    await session.execute(stmt)


async def report_exposure(
    user_id: str,
    personal_count: int,
    org_counts: dict[str, int],
    session: AsyncSession,
) -> None:
    """Record exposure counts submitted by a reporting client.

    Unknown users and organizations the user is not a member of are skipped
    without error. The personal report is written first and any failure there
    aborts the call. Organization entries are written one savepoint each and
    processed continue-on-error: successful entries are committed, then a 500
    listing the failed organization ids is raised.
    """
    user = await find_user(user_id, session)
    if not user:
        log.info("report.skipped", reason="unknown_user")
        return

    member_orgs = await list_member_org_ids(user.uuid, session)

    try:
        await _upsert_report(session, personal_count, user_uuid=user.uuid)
    except SQLAlchemyError as exc:
        log.error("report.save_failed", user_id=str(user.uuid), error=str(exc))
        raise HTTPException(status_code=500, detail="Error saving report") from exc
    log.info("report.updated", user_id=str(user.uuid), kind="personal")

    failed: list[str] = []
    for raw_org_id, count in org_counts.items():
        org_uuid = parse_uuid(raw_org_id)
        if org_uuid is None or org_uuid not in member_orgs:
            log.warning("report.org_skipped", user_id=str(user.uuid), org_id=raw_org_id)
            continue
        try:
            async with session.begin_nested():
                await _upsert_report(session, count, org_uuid=org_uuid)
        except SQLAlchemyError as exc:
            log.error("report.save_failed", org_id=str(org_uuid), error=str(exc))
            failed.append(str(org_uuid))
            continue
        log.info("report.updated", org_id=str(org_uuid), kind="organization")

    if failed:
        await session.commit()
        raise HTTPException(
            status_code=500,
            detail={"message": "Error saving organization reports", "failed_orgs": failed},
        )
