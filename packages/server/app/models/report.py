"""Exposed-credential report.

A row is either personal (``user_uuid`` set) or organizational (``org_uuid``
set), never both. Each key owns at most one row; the UNIQUE constraints back
the single-statement upsert in ``app.services.reports``.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import TimestampType, UUIDMixin, utcnow


class Report(UUIDMixin, SQLModel, table=True):
    __tablename__ = "reports"
    __table_args__ = (
        sa.CheckConstraint(
            "(user_uuid IS NULL) <> (org_uuid IS NULL)",
            name="ck_reports_single_owner",
        ),
    )

    user_uuid: Optional[UUID] = Field(default=None, foreign_key="users.uuid", unique=True)
    org_uuid: Optional[UUID] = Field(default=None, foreign_key="organizations.uuid", unique=True)
    exposed_count: int = Field(default=0, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=TimestampType)
    last_updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=TimestampType)


def clamp_exposed_count(value: int) -> int:
    """Stored counts are never negative."""
    return value if value > 0 else 0
