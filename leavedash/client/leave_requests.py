"""
Leave request client for the leave backend.

Besides the REST calls this module holds the two pieces of leave logic the
dashboard owns itself: deciding whether someone is on leave today, and
telling the team variant of a request apart from the personal one.
"""

from datetime import date
from typing import Any, BinaryIO, Iterable, List, Optional, Tuple, Union

import httpx

from leavedash.client.base import request_json
from leavedash.schemas import (
    CreateLeaveRequest,
    LeaveAttachment,
    LeaveDecision,
    LeaveRequestDetail,
    LeaveRequestFilters,
    LeaveRequestListResponse,
    LeaveStatus,
    LeaveStatusResult,
    OwnLeaveRequest,
    TeamLeaveRequest,
    TeamLeaveRequestFilters,
    TeamLeaveRequestListResponse,
)

# (file name, content, content type), the shape httpx expects for multipart
FilePayload = Tuple[str, Union[bytes, BinaryIO], str]


def is_on_leave(
    user_id: int,
    leave_requests: Iterable[TeamLeaveRequest],
    today: Optional[date] = None
) -> LeaveStatusResult:
    """
    Check whether a user is on approved leave today.

    A request covers every day from start_date through end_date inclusive.
    When several approved requests cover today, the one ending last wins so
    the reported end date is when the person is actually back; equal end
    dates keep list order.
    """
    today = today or date.today()
    current_leave = None

    for request in leave_requests:
        if request.user.id != user_id or request.status != LeaveStatus.APPROVED:
            continue
        if not request.start_date <= today <= request.end_date:
            continue
        if current_leave is None or request.end_date > current_leave.end_date:
            current_leave = request

    if current_leave is None:
        return LeaveStatusResult(is_on_leave=False)

    return LeaveStatusResult(
        is_on_leave=True,
        leave_type=current_leave.leave_type.name,
        end_date=current_leave.end_date
    )


def is_team_leave_request(request: Any) -> bool:
    """True for the team variant (or a raw payload carrying a ``user``)."""
    if isinstance(request, dict):
        return "user" in request
    return getattr(request, "kind", None) == "team"


def merge_decision(request: LeaveRequestDetail, decision: LeaveDecision) -> LeaveRequestDetail:
    """Splice an approve/reject response into a held copy of the request."""
    update = {
        "status": decision.status,
        "approver": decision.approver,
        "approved_at": decision.approved_at,
    }
    if decision.rejection_reason is not None:
        update["rejection_reason"] = decision.rejection_reason
    return request.model_copy(update=update)


# ============= List & Detail =============
async def get_my_leave_requests(
    client: httpx.AsyncClient,
    filters: Optional[LeaveRequestFilters] = None
) -> LeaveRequestListResponse:
    filters = filters or LeaveRequestFilters()
    data = await request_json(
        client, "GET", "/leave-requests",
        action="fetch my leave requests",
        params=filters.to_params()
    )
    return LeaveRequestListResponse.model_validate(data)


async def get_recent_leave_requests(client: httpx.AsyncClient, limit: int = 3) -> LeaveRequestListResponse:
    return await get_my_leave_requests(client, LeaveRequestFilters(per_page=limit))


async def get_team_leave_requests(
    client: httpx.AsyncClient,
    filters: Optional[TeamLeaveRequestFilters] = None
) -> TeamLeaveRequestListResponse:
    filters = filters or TeamLeaveRequestFilters()
    data = await request_json(
        client, "GET", "/leave-requests/team",
        action="fetch team leave requests",
        params=filters.to_params()
    )
    return TeamLeaveRequestListResponse.model_validate(data)


async def get_pending_leave_requests(
    client: httpx.AsyncClient,
    filters: Optional[TeamLeaveRequestFilters] = None
) -> TeamLeaveRequestListResponse:
    """Team requests awaiting approval; any status the caller set is replaced."""
    filters = filters or TeamLeaveRequestFilters()
    pending_filters = filters.model_copy(update={"status": LeaveStatus.PENDING})
    data = await request_json(
        client, "GET", "/leave-requests/team",
        action="fetch pending leave requests",
        params=pending_filters.to_params()
    )
    return TeamLeaveRequestListResponse.model_validate(data)


async def get_leave_request_detail(client: httpx.AsyncClient, leave_request_id: int) -> LeaveRequestDetail:
    data = await request_json(
        client, "GET", f"/leave-requests/{leave_request_id}",
        action=f"fetch leave request {leave_request_id}"
    )
    return LeaveRequestDetail.model_validate(data)


# ============= Mutations =============
async def create_leave_request(client: httpx.AsyncClient, data: CreateLeaveRequest) -> OwnLeaveRequest:
    """Submit a new request. Balance and date-range rules are the caller's job."""
    created = await request_json(
        client, "POST", "/leave-requests",
        action="create leave request",
        json=data.model_dump(mode="json")
    )
    return OwnLeaveRequest.model_validate(created)


async def approve_leave_request(client: httpx.AsyncClient, leave_request_id: int) -> LeaveDecision:
    data = await request_json(
        client, "PATCH", f"/leave-requests/{leave_request_id}/approve",
        action=f"approve leave request {leave_request_id}"
    )
    return LeaveDecision.model_validate(data)


async def reject_leave_request(
    client: httpx.AsyncClient,
    leave_request_id: int,
    rejection_reason: str
) -> LeaveDecision:
    data = await request_json(
        client, "PATCH", f"/leave-requests/{leave_request_id}/reject",
        action=f"reject leave request {leave_request_id}",
        json={"rejection_reason": rejection_reason}
    )
    return LeaveDecision.model_validate(data)


# ============= Attachments =============
async def upload_leave_attachment(
    client: httpx.AsyncClient,
    leave_request_id: int,
    file: FilePayload
) -> LeaveAttachment:
    """Upload one file; callers issue one call per file."""
    data = await request_json(
        client, "POST", f"/leave-requests/{leave_request_id}/attachments",
        action=f"upload attachment for leave request {leave_request_id}",
        files={"file": file}
    )
    return LeaveAttachment.model_validate(data)


async def get_leave_attachments(client: httpx.AsyncClient, leave_request_id: int) -> List[LeaveAttachment]:
    data = await request_json(
        client, "GET", f"/leave-requests/{leave_request_id}/attachments",
        action=f"fetch attachments for leave request {leave_request_id}"
    )
    attachments = (data or {}).get("attachments") or []
    return [LeaveAttachment.model_validate(item) for item in attachments]
