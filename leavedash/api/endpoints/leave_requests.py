from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError
from typing import List, Optional
from datetime import date
import httpx
from leavedash.api.dependencies import get_backend_client
from leavedash.client.leave_requests import (
    get_leave_attachments,
    get_my_leave_requests,
    get_recent_leave_requests,
    get_team_leave_requests,
    upload_leave_attachment,
)
from leavedash.schemas import (
    AttachmentUploadResult,
    CreateLeaveRequest,
    LeaveAttachment,
    LeaveRequestFilters,
    LeaveRequestListResponse,
    LeaveRequestView,
    LeaveStatus,
    SubmissionResult,
    TeamLeaveRequestFilters,
    TeamLeaveRequestListResponse,
)
from leavedash.services.leave_review import load_request_view
from leavedash.services.leave_submission import (
    LeaveFormError,
    SelectedFile,
    screen_attachments,
    submit_leave_request,
)

router = APIRouter(prefix="/leave-requests", tags=["Leave Requests"])


async def read_uploads(files: Optional[List[UploadFile]]) -> List[SelectedFile]:
    selected = []
    for upload in files or []:
        selected.append(SelectedFile(
            file_name=upload.filename or "attachment",
            content_type=upload.content_type or "",
            content=await upload.read()
        ))
    return selected


@router.get("", response_model=LeaveRequestListResponse)
async def list_my_leave_requests(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """List the current user's own leave requests."""
    filters = LeaveRequestFilters(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        page=page,
        per_page=per_page
    )
    return await get_my_leave_requests(client, filters)


@router.get("/recent", response_model=LeaveRequestListResponse)
async def list_recent_leave_requests(
    limit: int = Query(3, ge=1, le=20),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """Most recent own requests, for the dashboard home card."""
    return await get_recent_leave_requests(client, limit)


@router.get("/team", response_model=TeamLeaveRequestListResponse)
async def list_team_leave_requests(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user_id: Optional[int] = Query(None),
    leave_type_id: Optional[int] = Query(None),
    employee_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """List leave requests across the current user's team."""
    filters = TeamLeaveRequestFilters(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        user_id=user_id,
        leave_type_id=leave_type_id,
        employee_id=employee_id,
        page=page,
        per_page=per_page
    )
    return await get_team_leave_requests(client, filters)


@router.post("", response_model=SubmissionResult, status_code=status.HTTP_201_CREATED)
async def create_leave_request(
    leave_type_id: int = Form(...),
    start_date: date = Form(...),
    end_date: date = Form(...),
    reason: str = Form(""),
    proxy_user_id: int = Form(...),
    files: Optional[List[UploadFile]] = File(None),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """
    Submit a new leave request with optional attachments.

    Files over the size limit or of an unsupported type are skipped and
    listed in ``rejected_files``. The request is created even if some
    uploads fail; ``uploads`` reports each file so it can be retried.
    """
    try:
        form = CreateLeaveRequest(
            leave_type_id=leave_type_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            proxy_user_id=proxy_user_id
        )
    except ValidationError as exc:
        raise LeaveFormError([error["msg"] for error in exc.errors()])

    return await submit_leave_request(client, form, await read_uploads(files))


@router.get("/{leave_request_id}", response_model=LeaveRequestView)
async def get_leave_request(
    leave_request_id: int,
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """Request detail with its attachments and whether the viewer may decide it."""
    return await load_request_view(client, leave_request_id)


@router.get("/{leave_request_id}/attachments", response_model=List[LeaveAttachment])
async def list_attachments(
    leave_request_id: int,
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    return await get_leave_attachments(client, leave_request_id)


@router.post("/{leave_request_id}/attachments", response_model=AttachmentUploadResult)
async def retry_attachment(
    leave_request_id: int,
    file: UploadFile = File(...),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """
    Upload a single file again, e.g. after it failed during submission.

    Backend failures keep their status code, unlike the per-file results of
    a full submission.
    """
    accepted, rejected = screen_attachments(await read_uploads([file]))
    if rejected:
        raise LeaveFormError([f"{r.file_name}: {r.reason}" for r in rejected])

    attachment = await upload_leave_attachment(client, leave_request_id, accepted[0].as_payload())
    return AttachmentUploadResult(file_name=accepted[0].file_name, success=True, attachment=attachment)
