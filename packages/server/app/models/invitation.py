"""Pending invitation, recorded when outbound mail is disabled."""

from sqlmodel import Field, SQLModel


class Invitation(SQLModel, table=True):
    __tablename__ = "invitations"

    email: str = Field(primary_key=True)
