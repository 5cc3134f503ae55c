"""Leave request and leave balance schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.leave import LeaveCategory, LeaveRequestStatus


class LeaveRequestCreate(BaseModel):
    """Schema for submitting a leave request."""

    start_date: date
    end_date: date
    category: LeaveCategory = LeaveCategory.PAID
    reason: str = Field(..., max_length=2000)


class LeaveRequestUpdate(BaseModel):
    """Soft edit of a pending request. Status is never changed here."""

    start_date: date | None = None
    end_date: date | None = None
    category: LeaveCategory | None = None
    reason: str | None = Field(None, max_length=2000)


class LeaveRequestReject(BaseModel):
    """Body of a reject call. An empty reason is refused by the service."""

    reason: str = Field("", max_length=2000)


class LeaveRequestResponse(BaseModel):
    """Leave request response schema."""

    id: UUID
    staff_id: UUID
    staff_name: str
    staff_code: str | None
    position: str | None
    branch: str | None
    start_date: date
    end_date: date
    days: int
    category: LeaveCategory
    reason: str
    status: LeaveRequestStatus
    approved_by: UUID | None
    approved_by_name: str | None
    approval_date: datetime | None
    rejection_reason: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LeaveRequestListResponse(BaseModel):
    """Paginated list of leave requests."""

    items: list[LeaveRequestResponse]
    total: int
    skip: int
    limit: int


class LeaveBalanceResponse(BaseModel):
    """Leave balance of one staff member for one year."""

    id: str
    staff_id: UUID
    staff_name: str
    year: int
    quota: int
    used: int
    pending: int
    remaining: int
    last_updated: datetime

    model_config = {"from_attributes": True}


class BalanceCheckRequest(BaseModel):
    """Pre-submit balance check for a prospective request."""

    start_date: date
    end_date: date
    category: LeaveCategory = LeaveCategory.PAID

    @model_validator(mode="after")
    def check_range(self) -> "BalanceCheckRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BalanceCheckResponse(BaseModel):
    """Result of a balance check."""

    has_balance: bool
    remaining: int
    requested: int
