from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import Optional
from datetime import date
import httpx
from leavedash.api.dependencies import get_backend_client
from leavedash.client.leave_requests import (
    approve_leave_request,
    get_pending_leave_requests,
    merge_decision,
    reject_leave_request,
)
from leavedash.schemas import (
    LeaveRequestDetail,
    RejectRequest,
    TeamLeaveRequestFilters,
    TeamLeaveRequestListResponse,
)
from leavedash.services.leave_review import can_approve, load_for_decision

router = APIRouter(prefix="/approvals", tags=["Approvals"])


async def get_decidable_request(client: httpx.AsyncClient, leave_request_id: int) -> LeaveRequestDetail:
    """Fetch the request and refuse before any mutating call if the viewer may not decide it."""
    leave_request, subordinates = await load_for_decision(client, leave_request_id)

    if not any(sub.id == leave_request.user.id for sub in subordinates):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the requester's manager can approve or reject this leave request"
        )

    if not can_approve(leave_request, subordinates):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only pending leave requests can be decided, current status: {leave_request.status.value}"
        )

    return leave_request


@router.get("/leave-requests", response_model=TeamLeaveRequestListResponse)
async def list_pending_leave_requests(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user_id: Optional[int] = Query(None),
    leave_type_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """Team leave requests waiting for a decision."""
    filters = TeamLeaveRequestFilters(
        start_date=start_date,
        end_date=end_date,
        user_id=user_id,
        leave_type_id=leave_type_id,
        page=page,
        per_page=per_page
    )
    return await get_pending_leave_requests(client, filters)


@router.post("/leave-requests/{leave_request_id}/approve", response_model=LeaveRequestDetail)
async def approve_leave(
    leave_request_id: int,
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """Approve a subordinate's pending leave request."""
    leave_request = await get_decidable_request(client, leave_request_id)
    decision = await approve_leave_request(client, leave_request_id)
    return merge_decision(leave_request, decision)


@router.post("/leave-requests/{leave_request_id}/reject", response_model=LeaveRequestDetail)
async def reject_leave(
    leave_request_id: int,
    reject_data: RejectRequest,
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """Reject a subordinate's pending leave request. A reason is required."""
    leave_request = await get_decidable_request(client, leave_request_id)
    decision = await reject_leave_request(client, leave_request_id, reject_data.rejection_reason)
    return merge_decision(leave_request, decision)
