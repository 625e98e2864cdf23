from datetime import date

import httpx
import pytest

from factories import leave_request_payload
from leavedash.schemas import CreateLeaveRequest, Holiday, LeaveBalanceItem, LeaveTypeResponse
from leavedash.services.leave_submission import (
    LeaveFormError,
    SelectedFile,
    format_file_size,
    screen_attachments,
    submit_leave_request,
    upload_attachments,
    validate_leave_form,
)

ANNUAL = LeaveTypeResponse(id=1, name="Annual Leave")
OFFICIAL = LeaveTypeResponse(id=2, name="公假")
SICK = LeaveTypeResponse(id=3, name="Sick Leave")

BALANCES = [
    LeaveBalanceItem(leave_type=ANNUAL, total_days=14, used_days=4, remaining_days=10),
    LeaveBalanceItem(leave_type=OFFICIAL, total_days=5, used_days=0, remaining_days=5),
    LeaveBalanceItem(leave_type=SICK, total_days=30, used_days=30, remaining_days=0),
]


def pdf(name="proof.pdf", size=1024):
    return SelectedFile(file_name=name, content_type="application/pdf", content=b"x" * size)


def weekday_form(leave_type_id=1, start=date(2024, 3, 4), end=date(2024, 3, 6)):
    # 2024-03-04 is a Monday
    return CreateLeaveRequest(
        leave_type_id=leave_type_id,
        start_date=start,
        end_date=end,
        reason="Family matters",
        proxy_user_id=30
    )


def stub_form_data(backend, year=2024, holidays=None):
    backend.add("GET", "/leave-balances/me", json={
        "year": year,
        "balances": [b.model_dump() for b in BALANCES],
    })
    backend.add("GET", "/leave-types", json=[t.model_dump() for t in (ANNUAL, OFFICIAL, SICK)])
    backend.add("GET", "/holidays", json={"holidays": holidays or []})


def attachment_handler(failing=()):
    def handler(request):
        file_name = request.content.split(b'filename="', 1)[1].split(b'"', 1)[0].decode()
        if file_name in failing:
            return httpx.Response(500, json={"detail": "storage unavailable"})
        return httpx.Response(201, json={
            "id": abs(hash(file_name)) % 1000,
            "leave_request_id": 42,
            "file_name": file_name,
            "file_type": "application/pdf",
            "file_size": 1024,
            "uploaded_at": "2024-02-20T08:00:00",
        })
    return handler


class TestScreenAttachments:
    """Selection-time size and type filter"""

    def test_accepts_supported_files(self):
        files = [pdf(), SelectedFile("scan.png", "image/png", b"png")]
        accepted, rejected = screen_attachments(files)
        assert [f.file_name for f in accepted] == ["proof.pdf", "scan.png"]
        assert rejected == []

    def test_rejects_oversized_file(self):
        accepted, rejected = screen_attachments([pdf(size=10 * 1024 * 1024 + 1)])
        assert accepted == []
        assert rejected[0].file_name == "proof.pdf"
        assert "10 MB" in rejected[0].reason

    def test_file_at_limit_is_accepted(self):
        accepted, _ = screen_attachments([pdf(size=10 * 1024 * 1024)])
        assert len(accepted) == 1

    def test_rejects_unsupported_type(self):
        _, rejected = screen_attachments([SelectedFile("run.exe", "application/x-msdownload", b"MZ")])
        assert rejected[0].reason == "Unsupported file type: application/x-msdownload"

    def test_format_file_size(self):
        assert format_file_size(0) == "0 Bytes"
        assert format_file_size(512) == "512 Bytes"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(10 * 1024 * 1024) == "10 MB"


class TestValidateLeaveForm:
    """Client-side form rules"""

    def test_valid_form(self):
        validate_leave_form(weekday_form(), [], BALANCES, [ANNUAL, OFFICIAL, SICK], [])

    def test_weekend_in_range(self):
        form = weekday_form(start=date(2024, 3, 8), end=date(2024, 3, 11))
        with pytest.raises(LeaveFormError) as exc_info:
            validate_leave_form(form, [], BALANCES, [ANNUAL], [])
        assert "2024-03-09, 2024-03-10" in exc_info.value.errors[0]

    def test_holiday_in_range(self):
        holidays = [Holiday(id=1, name="Peace Memorial Day", date="2024-03-05")]
        with pytest.raises(LeaveFormError):
            validate_leave_form(weekday_form(), holidays, BALANCES, [ANNUAL], [])

    def test_exhausted_balance(self):
        with pytest.raises(LeaveFormError) as exc_info:
            validate_leave_form(weekday_form(leave_type_id=3), [], BALANCES, [SICK], [])
        assert exc_info.value.errors == ["No remaining balance for the selected leave type"]

    def test_official_leave_requires_attachment(self):
        with pytest.raises(LeaveFormError) as exc_info:
            validate_leave_form(weekday_form(leave_type_id=2), [], BALANCES, [OFFICIAL], [])
        assert exc_info.value.errors == ["An attachment is required for 公假"]

        validate_leave_form(weekday_form(leave_type_id=2), [], BALANCES, [OFFICIAL], [pdf()])

    def test_all_errors_are_reported(self):
        form = weekday_form(leave_type_id=3, start=date(2024, 3, 9), end=date(2024, 3, 9))
        with pytest.raises(LeaveFormError) as exc_info:
            validate_leave_form(form, [], BALANCES, [SICK], [])
        assert len(exc_info.value.errors) == 2


class TestSubmitLeaveRequest:
    """End-to-end submission with attachments"""

    @pytest.mark.anyio
    async def test_valid_files_uploaded_oversized_file_reported(self, backend, backend_client):
        stub_form_data(backend)
        backend.add("POST", "/leave-requests", status_code=201, json=leave_request_payload(leave_id=42, status="pending"))
        backend.add("POST", "/leave-requests/42/attachments", handler=attachment_handler())

        files = [pdf("a.pdf"), pdf("b.pdf"), pdf("huge.pdf", size=11 * 1024 * 1024)]
        result = await submit_leave_request(backend_client, weekday_form(), files)

        assert result.leave_request.id == 42
        assert result.uploaded_count == 2
        assert result.failed_count == 0
        assert [u.file_name for u in result.uploads] == ["a.pdf", "b.pdf"]
        assert [r.file_name for r in result.rejected_files] == ["huge.pdf"]
        assert len(backend.calls("POST", "/leave-requests/42/attachments")) == 2

    @pytest.mark.anyio
    async def test_failed_upload_keeps_request(self, backend, backend_client):
        stub_form_data(backend)
        backend.add("POST", "/leave-requests", status_code=201, json=leave_request_payload(leave_id=42, status="pending"))
        backend.add("POST", "/leave-requests/42/attachments", handler=attachment_handler(failing={"b.pdf"}))

        result = await submit_leave_request(backend_client, weekday_form(), [pdf("a.pdf"), pdf("b.pdf")])

        assert result.uploaded_count == 1
        assert result.failed_count == 1
        failed = result.uploads[1]
        assert failed.file_name == "b.pdf"
        assert failed.success is False
        assert "500" in failed.error
        assert result.uploads[0].attachment.file_name == "a.pdf"

    @pytest.mark.anyio
    async def test_form_error_never_creates_request(self, backend, backend_client):
        stub_form_data(backend, holidays=[{"id": 1, "name": "Peace Memorial Day", "date": "2024-03-05"}])

        with pytest.raises(LeaveFormError):
            await submit_leave_request(backend_client, weekday_form(), [])

        assert backend.calls("POST", "/leave-requests") == []

    @pytest.mark.anyio
    async def test_holidays_fetched_for_each_year_spanned(self, backend, backend_client):
        stub_form_data(backend)
        # Sick leave balance is exhausted, so the form stops before creating
        form = weekday_form(leave_type_id=3, start=date(2024, 12, 31), end=date(2025, 1, 2))

        with pytest.raises(LeaveFormError):
            await submit_leave_request(backend_client, form)

        years = sorted(r.url.params["year"] for r in backend.calls("GET", "/holidays"))
        assert years == ["2024", "2025"]

    @pytest.mark.anyio
    async def test_upload_attachments_keeps_input_order(self, backend, backend_client):
        backend.add("POST", "/leave-requests/42/attachments", handler=attachment_handler(failing={"a.pdf"}))

        results = await upload_attachments(backend_client, 42, [pdf("a.pdf"), pdf("b.pdf"), pdf("c.pdf")])

        assert [(r.file_name, r.success) for r in results] == [("a.pdf", False), ("b.pdf", True), ("c.pdf", True)]
