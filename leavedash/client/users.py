"""
User and team lookups.

"Team members" are the current user's colleagues; "subordinates" are the
people the current user manages and may approve leave for.
"""

from typing import List

import httpx

from leavedash.client.base import request_json
from leavedash.schemas import TeamMember, UserProfile


async def get_current_user(client: httpx.AsyncClient) -> UserProfile:
    data = await request_json(client, "GET", "/users/me", action="fetch current user")
    return UserProfile.model_validate(data)


async def get_user_profile(client: httpx.AsyncClient, user_id: int) -> UserProfile:
    data = await request_json(client, "GET", f"/users/{user_id}", action=f"fetch user {user_id}")
    return UserProfile.model_validate(data)


async def get_team_members(client: httpx.AsyncClient) -> List[TeamMember]:
    data = await request_json(client, "GET", "/users/team", action="fetch team members")
    return [TeamMember.model_validate(item) for item in data or []]


async def get_subordinates(client: httpx.AsyncClient) -> List[TeamMember]:
    data = await request_json(client, "GET", "/users/subordinates", action="fetch subordinates")
    return [TeamMember.model_validate(item) for item in data or []]
