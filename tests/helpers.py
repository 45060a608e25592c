"""Test helper functions for common setup through the API and the fake stores."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from httpx import AsyncClient

from src.taskboard.models import Team, User
from tests.factories import DEFAULT_TEST_PASSWORD, TeamFactory, TeamMemberFactory, UserFactory
from tests.fakes import InMemoryTeamStore, InMemoryUserStore


@dataclass
class Session:
    user_id: UUID
    email: str
    access_token: str
    refresh_token: str

    @property
    def headers(self) -> dict[str, str]:
        return auth_headers(self.access_token)


def auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def refresh_cookie(refresh_token: str) -> dict[str, str]:
    """Explicit Cookie header, so a test controls exactly which token is presented."""
    return {"Cookie": f"refresh_token={refresh_token}"}


def due_in(hours: float) -> str:
    return (datetime.now(UTC) + timedelta(hours=hours)).isoformat()


def seed_user(users: InMemoryUserStore, user_type: str | None = None, **kwargs) -> User:
    """Put a user with DEFAULT_TEST_PASSWORD straight into the fake store."""
    if user_type is not None:
        kwargs["user_type"] = user_type
    user = UserFactory.build(**kwargs)
    users.users[user.id] = user
    return user


def seed_team(teams: InMemoryTeamStore, owner: User, *members: User, **kwargs) -> Team:
    team = TeamFactory.build(owner_id=owner.id, **kwargs)
    teams.teams[team.id] = team
    teams.members[(team.id, owner.id)] = TeamMemberFactory.owner(
        team_id=team.id, user_id=owner.id
    )
    for member in members:
        teams.members[(team.id, member.id)] = TeamMemberFactory.build(
            team_id=team.id, user_id=member.id
        )
    return team


async def login(
    client: AsyncClient, email: str, password: str = DEFAULT_TEST_PASSWORD
) -> Session:
    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    body = response.json()
    client.cookies.clear()
    return Session(
        user_id=UUID(body["user"]["id"]),
        email=body["user"]["email"],
        access_token=body["access_token"],
        refresh_token=response.cookies["refresh_token"],
    )


async def register_and_login(
    client: AsyncClient, email: str, password: str = DEFAULT_TEST_PASSWORD
) -> Session:
    response = await client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return await login(client, email, password)
