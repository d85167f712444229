"""Tests for table timestamp columns."""

from datetime import timezone

from sqlalchemy.dialects import mysql, postgresql

from app.models.base import utcnow
from app.models.report import Report
from app.models.user import User

TIMESTAMP_COLUMNS = [
    User.__table__.c.created_at,
    User.__table__.c.updated_at,
    Report.__table__.c.created_at,
    Report.__table__.c.last_updated_at,
]


def test_utcnow_is_timezone_aware():
    assert utcnow().tzinfo is timezone.utc


def test_timestamp_columns_keep_timezone_on_postgres():
    for column in TIMESTAMP_COLUMNS:
        impl = column.type.dialect_impl(postgresql.dialect())
        assert impl.timezone is True, column.name


def test_timestamp_columns_keep_microseconds_on_mysql():
    for column in TIMESTAMP_COLUMNS:
        impl = column.type.dialect_impl(mysql.dialect())
        assert isinstance(impl, mysql.DATETIME), column.name
        assert impl.fsp == 6, column.name


async def test_seeded_rows_get_timestamps(store):
    user = await store.user()
    [stored] = await store.all(User)
    assert stored.uuid == user.uuid
    assert stored.created_at is not None
    assert stored.updated_at is not None
