# Database models

from app.models.staff import Staff
from app.models.leave import LeaveBalance, LeaveCategory, LeaveRequest, LeaveRequestStatus

__all__ = [
    "Staff",
    "LeaveBalance",
    "LeaveCategory",
    "LeaveRequest",
    "LeaveRequestStatus",
]
