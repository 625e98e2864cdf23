"""
Reviewing a single leave request: detail view and approval authority.

A manager may approve or reject a request only while it is pending and only
when the requester is one of their subordinates. The backend enforces the
same rule; checking here keeps the dashboard from offering actions that
would be refused.
"""

import asyncio
from typing import Sequence, Tuple

import httpx

from leavedash.client.leave_requests import get_leave_attachments, get_leave_request_detail
from leavedash.client.users import get_current_user, get_subordinates
from leavedash.schemas import LeaveRequestDetail, LeaveRequestView, LeaveStatus, TeamMember, UserProfile


def can_approve(leave_request: LeaveRequestDetail, subordinates: Sequence[TeamMember]) -> bool:
    return (
        leave_request.status == LeaveStatus.PENDING
        and any(sub.id == leave_request.user.id for sub in subordinates)
    )


async def _subordinates_of(client: httpx.AsyncClient, user: UserProfile):
    if not user.is_manager:
        return []
    return await get_subordinates(client)


async def load_request_view(client: httpx.AsyncClient, leave_request_id: int) -> LeaveRequestView:
    leave_request, attachments, user = await asyncio.gather(
        get_leave_request_detail(client, leave_request_id),
        get_leave_attachments(client, leave_request_id),
        get_current_user(client),
    )
    subordinates = await _subordinates_of(client, user)

    return LeaveRequestView(
        leave_request=leave_request,
        attachments=attachments,
        can_approve=can_approve(leave_request, subordinates)
    )


async def load_for_decision(
    client: httpx.AsyncClient,
    leave_request_id: int
) -> Tuple[LeaveRequestDetail, Sequence[TeamMember]]:
    leave_request, user = await asyncio.gather(
        get_leave_request_detail(client, leave_request_id),
        get_current_user(client),
    )
    return leave_request, await _subordinates_of(client, user)
