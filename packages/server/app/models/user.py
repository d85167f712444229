"""User model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    email: str = Field(unique=True, index=True, nullable=False)
    name: str = Field(default="", nullable=False)
    # Empty until the owner sets a master password; empty means placeholder.
    akey: str = Field(default="", nullable=False)
    private_key: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return not self.akey
