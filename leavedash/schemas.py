from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List, Literal, Union
from datetime import date, datetime
import enum


class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class MemberStatus(str, enum.Enum):
    AVAILABLE = "available"
    ON_LEAVE = "on_leave"


# ============= Shared Schemas =============
class Pagination(BaseModel):
    total: int
    page: int
    per_page: int
    total_pages: int


class PersonRef(BaseModel):
    id: int
    first_name: str
    last_name: str
    employee_id: Optional[str] = None


class LeaveTypeBasic(BaseModel):
    id: int
    name: str


class Department(BaseModel):
    id: int
    name: str


# ============= Leave Request Schemas =============
class LeaveRequestFilters(BaseModel):
    status: Optional[LeaveStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: Optional[int] = Field(None, ge=1)
    per_page: Optional[int] = Field(None, ge=1)

    def to_params(self) -> dict:
        """Query parameters with unset filters left out."""
        return self.model_dump(mode="json", exclude_none=True)


class TeamLeaveRequestFilters(LeaveRequestFilters):
    user_id: Optional[int] = None
    leave_type_id: Optional[int] = None
    employee_id: Optional[int] = None


class LeaveRequestBase(BaseModel):
    id: int
    request_id: str
    leave_type: LeaveTypeBasic
    start_date: date
    end_date: date
    days_count: float
    reason: str = ""
    status: LeaveStatus
    proxy_person: Optional[PersonRef] = None
    approver: Optional[PersonRef] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime


class OwnLeaveRequest(LeaveRequestBase):
    """A request viewed by the employee who filed it."""
    kind: Literal["own"] = "own"


class TeamLeaveRequest(LeaveRequestBase):
    """A request viewed from the team side; carries the requester."""
    kind: Literal["team"] = "team"
    user: PersonRef


LeaveRequest = Union[OwnLeaveRequest, TeamLeaveRequest]


class LeaveRequestDetail(LeaveRequestBase):
    user: PersonRef


class LeaveRequestListResponse(BaseModel):
    leave_requests: List[OwnLeaveRequest]
    pagination: Pagination


class TeamLeaveRequestListResponse(BaseModel):
    leave_requests: List[TeamLeaveRequest]
    pagination: Pagination


class CreateLeaveRequest(BaseModel):
    leave_type_id: int
    start_date: date
    end_date: date
    reason: str = ""
    proxy_user_id: int

    @model_validator(mode="after")
    def validate_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be greater than or equal to start_date")
        return self


class LeaveDecision(BaseModel):
    """Approve/reject response: only the fields the transition stamped."""
    id: int
    request_id: str
    status: LeaveStatus
    approver: PersonRef
    approved_at: datetime
    rejection_reason: Optional[str] = None


class RejectRequest(BaseModel):
    rejection_reason: str = Field(..., min_length=1)

    @field_validator("rejection_reason")
    @classmethod
    def validate_reason(cls, v):
        if not v.strip():
            raise ValueError("Rejection reason cannot be blank")
        return v.strip()


class LeaveStatusResult(BaseModel):
    is_on_leave: bool
    leave_type: Optional[str] = None
    end_date: Optional[date] = None


# ============= Attachment Schemas =============
class LeaveAttachment(BaseModel):
    id: int
    leave_request_id: int
    file_name: str
    file_type: str
    file_size: int
    uploaded_at: datetime
    file_path: Optional[str] = None


class RejectedFile(BaseModel):
    file_name: str
    reason: str


class AttachmentUploadResult(BaseModel):
    file_name: str
    success: bool
    attachment: Optional[LeaveAttachment] = None
    error: Optional[str] = None


class SubmissionResult(BaseModel):
    leave_request: OwnLeaveRequest
    uploads: List[AttachmentUploadResult] = []
    rejected_files: List[RejectedFile] = []
    uploaded_count: int = 0
    failed_count: int = 0


class LeaveRequestView(BaseModel):
    leave_request: LeaveRequestDetail
    attachments: List[LeaveAttachment]
    can_approve: bool


# ============= Leave Type & Balance Schemas =============
class LeaveTypeResponse(LeaveTypeBasic):
    description: Optional[str] = None


class LeaveBalanceItem(BaseModel):
    leave_type: LeaveTypeBasic
    total_days: float
    used_days: float
    remaining_days: float


class LeaveBalanceResponse(BaseModel):
    year: Optional[int] = None
    balances: List[LeaveBalanceItem] = []


# ============= Holiday Schemas =============
class Holiday(BaseModel):
    id: int
    name: str
    date: str  # YYYY-MM-DD, compared as a string
    description: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        if isinstance(v, date):
            return v.isoformat()
        # Reject anything that is not a calendar date
        return date.fromisoformat(v[:10]).isoformat()


class HolidayListResponse(BaseModel):
    holidays: List[Holiday] = []


class HolidayConflict(BaseModel):
    date: date
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None


class HolidayConflictsResponse(BaseModel):
    start_date: date
    end_date: date
    has_conflicts: bool
    conflicts: List[HolidayConflict]


# ============= User & Team Schemas =============
class ManagerOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    position: Optional[str] = None
    email: Optional[EmailStr] = None
    department: Optional[Department] = None


class UserProfile(BaseModel):
    id: int
    employee_id: Optional[str] = None
    first_name: str
    last_name: str
    email: EmailStr
    position: Optional[str] = None
    hire_date: Optional[date] = None
    is_manager: bool = False
    department: Optional[Department] = None
    manager: Optional[ManagerOut] = None
    annual_leave_quota: float = 0
    sick_leave_quota: float = 0
    personal_leave_quota: float = 0
    public_holiday_quota: float = 0


class TeamMember(BaseModel):
    id: int
    employee_id: Optional[str] = None
    first_name: str
    last_name: str
    position: Optional[str] = None
    email: Optional[EmailStr] = None
    department: Optional[Department] = None


class TeamMemberStatus(TeamMember):
    department: Optional[str] = None  # flattened department name
    status: MemberStatus = MemberStatus.AVAILABLE
    leave_type: Optional[str] = None
    leave_until: Optional[date] = None
    is_current_user: bool = False
    is_manager: bool = False


class TeamOverview(BaseModel):
    current_user_id: int
    manager: Optional[TeamMemberStatus] = None
    team_members: List[TeamMemberStatus]
    subordinates: List[TeamMemberStatus]
    departments: List[str]


# ============= Notification Schemas =============
class Notification(BaseModel):
    id: int
    title: str
    message: str
    related_to: str
    related_id: Optional[int] = None
    is_read: bool = False
    created_at: datetime


class NotificationListResponse(BaseModel):
    notifications: List[Notification] = []
    pagination: Pagination


class NotificationPage(NotificationListResponse):
    unread_count: int = 0


class MarkAllReadResponse(BaseModel):
    marked_count: int
    message: str


# ============= UI Preference Schemas =============
class PreferenceUpdate(BaseModel):
    value: str


class PreferenceResponse(BaseModel):
    key: str
    value: Optional[str]
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
