"""User-Organization membership."""

from uuid import UUID

from sqlmodel import Field, SQLModel

from .base import UUIDMixin


class UserOrg(UUIDMixin, SQLModel, table=True):
    __tablename__ = "users_organizations"

    user_uuid: UUID = Field(foreign_key="users.uuid", index=True, nullable=False)
    org_uuid: UUID = Field(foreign_key="organizations.uuid", index=True, nullable=False)
    role: str = Field(nullable=False, default="user")  # owner | admin | user | manager
