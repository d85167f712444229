"""
Script to attach an existing user to an organization for local testing of
exposure reports and the user details view.
"""

import argparse
import asyncio

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.database import get_session_context
from app.models.organization import Organization
from app.models.user import User
from app.models.user_org import UserOrg
from app.services.users import normalize_email


async def seed_membership(
    session: AsyncSession, email: str, org_name: str, role: str = "user"
) -> UserOrg:
    # 1. Ensure the organization exists
    result = await session.execute(select(Organization).where(Organization.name == org_name))
    org = result.scalar_one_or_none()
    if not org:
        org = Organization(name=org_name)
        session.add(org)
        print(f"Created organization: {org_name}")

    # 2. The user must already exist (invite them first)
    result = await session.execute(select(User).where(User.email == normalize_email(email)))
    user = result.scalar_one_or_none()
    if not user:
        raise LookupError(f"No user with email {email}; invite them first.")

    await session.flush()

    # 3. Ensure membership exists
    result = await session.execute(
        select(UserOrg).where(UserOrg.user_uuid == user.uuid, UserOrg.org_uuid == org.uuid)
    )
    membership = result.scalar_one_or_none()
    if not membership:
        membership = UserOrg(user_uuid=user.uuid, org_uuid=org.uuid, role=role)
        session.add(membership)
        await session.flush()
        print(f"Added {email} to {org_name} as {role}.")
    else:
        print(f"{email} is already a member of {org_name}.")
    return membership


async def main(email: str, org_name: str, role: str) -> None:
    async with get_session_context() as session:
        await seed_membership(session, email, org_name, role)
    print("Done.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Add an existing user to an organization.")
    parser.add_argument("--email", required=True, help="Email address of the user")
    parser.add_argument("--org", required=True, help="Organization name (created if missing)")
    parser.add_argument("--role", default="user", help="Membership role (default: user)")

    args = parser.parse_args()

    asyncio.run(main(args.email, args.org, args.role))
