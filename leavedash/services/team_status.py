"""
Team availability: who is around today and who is on approved leave.
"""

import asyncio
from datetime import date
from typing import List, Optional, Sequence

import httpx

from leavedash.client.leave_requests import get_team_leave_requests, is_on_leave
from leavedash.client.users import get_current_user, get_subordinates, get_team_members
from leavedash.schemas import (
    LeaveStatus,
    ManagerOut,
    MemberStatus,
    TeamLeaveRequest,
    TeamLeaveRequestFilters,
    TeamMember,
    TeamMemberStatus,
    TeamOverview,
)

ALL_DEPARTMENTS = "All"


def build_member_status(
    member: TeamMember,
    leave_requests: Sequence[TeamLeaveRequest],
    current_user_id: int,
    manager: Optional[ManagerOut] = None,
    today: Optional[date] = None
) -> TeamMemberStatus:
    leave = is_on_leave(member.id, leave_requests, today=today)

    return TeamMemberStatus(
        **member.model_dump(exclude={"department"}),
        department=member.department.name if member.department else None,
        status=MemberStatus.ON_LEAVE if leave.is_on_leave else MemberStatus.AVAILABLE,
        leave_type=leave.leave_type,
        leave_until=leave.end_date,
        is_current_user=member.id == current_user_id,
        is_manager=manager is not None and member.id == manager.id
    )


def list_departments(members: Sequence[TeamMember]) -> List[str]:
    departments = [ALL_DEPARTMENTS]
    for member in members:
        if member.department and member.department.name not in departments:
            departments.append(member.department.name)
    return departments


async def get_team_overview(client: httpx.AsyncClient, today: Optional[date] = None) -> TeamOverview:
    user, team, leave_data = await asyncio.gather(
        get_current_user(client),
        get_team_members(client),
        get_team_leave_requests(client, TeamLeaveRequestFilters(status=LeaveStatus.APPROVED)),
    )
    subordinates = await get_subordinates(client) if user.is_manager else []
    leave_requests = leave_data.leave_requests

    manager = None
    if user.manager:
        manager_member = TeamMember(
            id=user.manager.id,
            first_name=user.manager.first_name,
            last_name=user.manager.last_name,
            position=user.manager.position,
            email=user.manager.email,
            department=user.manager.department
        )
        manager = build_member_status(manager_member, leave_requests, user.id, user.manager, today)

    # The manager is shown on their own, not among colleagues
    colleagues = [member for member in team if not user.manager or member.id != user.manager.id]
    team_members = [build_member_status(member, leave_requests, user.id, today=today) for member in colleagues]

    return TeamOverview(
        current_user_id=user.id,
        manager=manager,
        team_members=team_members,
        subordinates=[build_member_status(member, leave_requests, user.id, today=today) for member in subordinates],
        departments=list_departments(colleagues)
    )
