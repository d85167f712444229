"""Users, organizations, memberships, pending invitations and exposure reports.

Revision ID: 0001_exposure_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql

revision: str = "0001_exposure_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TIMESTAMP = sa.DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql", "mariadb")


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("uuid", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", TIMESTAMP, nullable=False),
        sa.Column("updated_at", TIMESTAMP, nullable=False),
    )
    op.create_index("idx_organizations_name", "organizations", ["name"])

    op.create_table(
        "users",
        sa.Column("uuid", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.Text(), nullable=False, server_default=""),
        sa.Column("akey", sa.Text(), nullable=False, server_default=""),
        sa.Column("private_key", sa.Text(), nullable=True),
        sa.Column("created_at", TIMESTAMP, nullable=False),
        sa.Column("updated_at", TIMESTAMP, nullable=False),
    )

    op.create_table(
        "users_organizations",
        sa.Column("uuid", sa.Uuid(), primary_key=True),
        sa.Column("user_uuid", sa.Uuid(), sa.ForeignKey("users.uuid"), nullable=False),
        sa.Column("org_uuid", sa.Uuid(), sa.ForeignKey("organizations.uuid"), nullable=False),
        sa.Column("role", sa.Text(), nullable=False, server_default="user"),
    )
    op.create_index("idx_users_organizations_user", "users_organizations", ["user_uuid"])
    op.create_index("idx_users_organizations_org", "users_organizations", ["org_uuid"])

    op.create_table(
        "invitations",
        sa.Column("email", sa.String(255), primary_key=True),
    )

    # One personal row per user, one anonymized row per org.
    op.create_table(
        "reports",
        sa.Column("uuid", sa.Uuid(), primary_key=True),
        sa.Column("user_uuid", sa.Uuid(), sa.ForeignKey("users.uuid"), nullable=True, unique=True),
        sa.Column("org_uuid", sa.Uuid(), sa.ForeignKey("organizations.uuid"), nullable=True, unique=True),
        sa.Column("exposed_count", sa.Integer(), nullable=False),
        sa.Column("created_at", TIMESTAMP, nullable=False),
        sa.Column("last_updated_at", TIMESTAMP, nullable=False),
        sa.CheckConstraint(
            "(user_uuid IS NULL) <> (org_uuid IS NULL)",
            name="ck_reports_single_owner",
        ),
    )


def downgrade() -> None:
    op.drop_table("reports")
    op.drop_table("invitations")
    op.drop_index("idx_users_organizations_org", table_name="users_organizations")
    op.drop_index("idx_users_organizations_user", table_name="users_organizations")
    op.drop_table("users_organizations")
    op.drop_table("users")
    op.drop_index("idx_organizations_name", table_name="organizations")
    op.drop_table("organizations")
