"""
New leave request workflow.

Files are screened when they are picked (size and type), the form is checked
against holidays, balances and leave-type rules, and only then is the request
created. Attachments are uploaded afterwards, concurrently and one call per
file; a failed upload never undoes the created request, it is reported in
the per-file results so the user can retry that file.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import httpx

from leavedash.client.holidays import get_holidays_for_year
from leavedash.client.leave_requests import create_leave_request, upload_leave_attachment
from leavedash.client.leave_types import get_leave_types, get_my_leave_balance
from leavedash.core.config import settings
from leavedash.core.holiday_calendar import get_weekend_and_holiday_dates_in_range, years_in_range
from leavedash.schemas import (
    AttachmentUploadResult,
    CreateLeaveRequest,
    Holiday,
    LeaveBalanceItem,
    LeaveTypeResponse,
    RejectedFile,
    SubmissionResult,
)

logger = logging.getLogger(__name__)


class LeaveFormError(Exception):
    """The form failed client-side checks; nothing was sent to the backend."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclass
class SelectedFile:
    file_name: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def as_payload(self) -> Tuple[str, bytes, str]:
        return (self.file_name, self.content, self.content_type)


def format_file_size(size: int) -> str:
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def screen_attachments(files: Iterable[SelectedFile]) -> Tuple[List[SelectedFile], List[RejectedFile]]:
    """Split picked files into accepted ones and rejected ones with a reason."""
    accepted = []
    rejected = []

    for file in files:
        if file.size > settings.MAX_ATTACHMENT_SIZE:
            rejected.append(RejectedFile(
                file_name=file.file_name,
                reason=f"File is too large (over {format_file_size(settings.MAX_ATTACHMENT_SIZE)})"
            ))
        elif file.content_type not in settings.ALLOWED_ATTACHMENT_TYPES:
            rejected.append(RejectedFile(
                file_name=file.file_name,
                reason=f"Unsupported file type: {file.content_type or 'unknown'}"
            ))
        else:
            accepted.append(file)

    return accepted, rejected


def validate_leave_form(
    form: CreateLeaveRequest,
    holidays: Sequence[Holiday],
    balances: Sequence[LeaveBalanceItem],
    leave_types: Sequence[LeaveTypeResponse],
    attachments: Sequence[SelectedFile]
) -> None:
    """Raise LeaveFormError listing every rule the form breaks."""
    errors = []

    conflicts = get_weekend_and_holiday_dates_in_range(form.start_date, form.end_date, holidays)
    if conflicts:
        days = ", ".join(day.date.isoformat() for day in conflicts)
        errors.append(f"Leave period cannot include weekends or public holidays ({days})")

    balance = next((b for b in balances if b.leave_type.id == form.leave_type_id), None)
    if balance is None or balance.remaining_days <= 0:
        errors.append("No remaining balance for the selected leave type")

    leave_type = next((t for t in leave_types if t.id == form.leave_type_id), None)
    if leave_type is None:
        errors.append(f"Unknown leave type: {form.leave_type_id}")
    elif leave_type.name in settings.ATTACHMENT_REQUIRED_LEAVE_TYPES and not attachments:
        errors.append(f"An attachment is required for {leave_type.name}")

    if errors:
        raise LeaveFormError(errors)


async def _upload_one(client: httpx.AsyncClient, leave_request_id: int, file: SelectedFile) -> AttachmentUploadResult:
    try:
        attachment = await upload_leave_attachment(client, leave_request_id, file.as_payload())
    except httpx.HTTPError as exc:
        return AttachmentUploadResult(file_name=file.file_name, success=False, error=str(exc))
    return AttachmentUploadResult(file_name=file.file_name, success=True, attachment=attachment)


async def upload_attachments(
    client: httpx.AsyncClient,
    leave_request_id: int,
    files: Sequence[SelectedFile]
) -> List[AttachmentUploadResult]:
    """Upload every file concurrently; results keep the order of ``files``."""
    results = await asyncio.gather(*(_upload_one(client, leave_request_id, file) for file in files))
    return list(results)


async def submit_leave_request(
    client: httpx.AsyncClient,
    form: CreateLeaveRequest,
    files: Sequence[SelectedFile] = ()
) -> SubmissionResult:
    accepted, rejected = screen_attachments(files)
    if rejected:
        logger.info("Skipped %d attachment(s) at selection: %s", len(rejected), ", ".join(r.file_name for r in rejected))

    years = years_in_range(form.start_date, form.end_date)
    balance, leave_types, *holiday_lists = await asyncio.gather(
        get_my_leave_balance(client),
        get_leave_types(client),
        *(get_holidays_for_year(client, year) for year in years),
    )
    holidays = [holiday for holiday_list in holiday_lists for holiday in holiday_list]

    validate_leave_form(form, holidays, balance.balances, leave_types, accepted)

    leave_request = await create_leave_request(client, form)
    logger.info("Leave request %s created", leave_request.request_id)

    uploads = await upload_attachments(client, leave_request.id, accepted) if accepted else []
    failed = [result for result in uploads if not result.success]
    if failed:
        logger.warning(
            "Leave request %s created but %d of %d attachment(s) failed to upload",
            leave_request.request_id, len(failed), len(uploads)
        )

    return SubmissionResult(
        leave_request=leave_request,
        uploads=uploads,
        rejected_files=rejected,
        uploaded_count=len(uploads) - len(failed),
        failed_count=len(failed)
    )
