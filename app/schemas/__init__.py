"""Pydantic schemas."""

from app.schemas.leave import (
    BalanceCheckRequest,
    BalanceCheckResponse,
    LeaveBalanceResponse,
    LeaveRequestCreate,
    LeaveRequestListResponse,
    LeaveRequestReject,
    LeaveRequestResponse,
    LeaveRequestUpdate,
)
from app.schemas.permission import CapabilityResponse, PermissionSummary, RoleFlags
from app.schemas.staff import StaffResponse

__all__ = [
    # Leave
    "BalanceCheckRequest",
    "BalanceCheckResponse",
    "LeaveBalanceResponse",
    "LeaveRequestCreate",
    "LeaveRequestListResponse",
    "LeaveRequestReject",
    "LeaveRequestResponse",
    "LeaveRequestUpdate",
    # Permission
    "CapabilityResponse",
    "PermissionSummary",
    "RoleFlags",
    # Staff
    "StaffResponse",
]
