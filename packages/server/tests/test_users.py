"""
Tests for the user details view and the membership seed script.
"""

from __future__ import annotations

import uuid

import pytest

from app.models.organization import Organization
from app.models.user_org import UserOrg
from app.scripts.seed_membership import seed_membership
from app.services.users import parse_uuid


def test_parse_uuid():
    value = uuid.uuid4()
    assert parse_uuid(str(value)) == value
    assert parse_uuid("nope") is None
    assert parse_uuid("") is None


class TestUserDetails:
    async def test_unknown_user(self, client, system_headers):
        response = await client.get(
            f"/api/v1/system/user/{uuid.uuid4()}/details", headers=system_headers
        )
        assert response.status_code == 404

    async def test_pending_without_membership(self, client, system_headers, store):
        user = await store.user()
        await client.post("/api/v1/exposed", json={"userId": str(user.uuid), "me": 6, "org": {}})

        response = await client.get(
            f"/api/v1/system/user/{user.uuid}/details", headers=system_headers
        )
        assert response.status_code == 200
        assert response.json() == {
            "status": "Pending",
            "orgId": None,
            "membersCount": 0,
            "exposedCount": 0,
            "lastUpdatedAt": None,
        }

    async def test_active_member_without_report(self, client, system_headers, store):
        user = await store.user()
        org = await store.org()
        await store.member(user, org)

        data = (
            await client.get(f"/api/v1/system/user/{user.uuid}/details", headers=system_headers)
        ).json()
        assert data["status"] == "Active"
        assert data["orgId"] == str(org.uuid)
        assert data["membersCount"] == 1
        assert data["exposedCount"] == 0
        assert data["lastUpdatedAt"] is None

    async def test_active_member_with_org_report(self, client, system_headers, store):
        user = await store.user("alice@example.com")
        colleague = await store.user("bob@example.com")
        org = await store.org()
        other_org = await store.org("Other")
        await store.member(user, org)
        await store.member(colleague, org)
        await store.member(colleague, other_org)

        await client.post(
            "/api/v1/exposed",
            json={"userId": str(user.uuid), "me": 1, "org": {str(org.uuid): 12}},
        )

        data = (
            await client.get(f"/api/v1/system/user/{user.uuid}/details", headers=system_headers)
        ).json()
        assert data["status"] == "Active"
        assert data["membersCount"] == 2
        assert data["exposedCount"] == 12
        assert data["lastUpdatedAt"] is not None

    async def test_multiple_memberships_use_lowest_org_id(self, client, system_headers, store):
        user = await store.user()
        low = await store.add(Organization(uuid=uuid.UUID(int=1), name="Low"))
        high = await store.add(Organization(uuid=uuid.UUID(int=2), name="High"))
        await store.member(user, high)
        await store.member(user, low)

        data = (
            await client.get(f"/api/v1/system/user/{user.uuid}/details", headers=system_headers)
        ).json()
        assert data["orgId"] == str(low.uuid)


class TestSeedMembership:
    async def test_creates_org_and_membership(self, session_factory, store):
        user = await store.user("seed@example.com")
        async with session_factory() as session:
            membership = await seed_membership(session, "Seed@Example.com", "Seeded", role="admin")
            await session.commit()

        assert membership.user_uuid == user.uuid
        assert membership.role == "admin"
        assert [o.name for o in await store.all(Organization)] == ["Seeded"]

    async def test_is_idempotent(self, session_factory, store):
        await store.user("seed@example.com")
        for _ in range(2):
            async with session_factory() as session:
                await seed_membership(session, "seed@example.com", "Seeded")
                await session.commit()

        assert len(await store.all(Organization)) == 1
        assert len(await store.all(UserOrg)) == 1

    async def test_unknown_user(self, session_factory):
        async with session_factory() as session:
            with pytest.raises(LookupError):
                await seed_membership(session, "ghost@example.com", "Seeded")
