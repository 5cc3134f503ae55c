"""Leave request and leave balance models."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, BaseModel


class LeaveCategory(str, Enum):
    """Kind of leave. Only PAID consumes the yearly quota."""

    PAID = "paid"
    SICK = "sick"
    PERSONAL = "personal"
    UNPAID = "unpaid"


class LeaveRequestStatus(str, Enum):
    """Leave request lifecycle. APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveRequest(BaseModel):
    """One staff member's request for a contiguous, inclusive date range."""

    __tablename__ = "leave_requests"

    staff_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Snapshot of the staff record at submission time
    staff_name: Mapped[str] = mapped_column(String(200), nullable=False)
    staff_code: Mapped[str | None] = mapped_column(String(50))
    position: Mapped[str | None] = mapped_column(String(100))
    branch: Mapped[str | None] = mapped_column(String(100))

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    category: Mapped[LeaveCategory] = mapped_column(String(20), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[LeaveRequestStatus] = mapped_column(
        String(20),
        default=LeaveRequestStatus.PENDING,
        server_default="pending",
        index=True,
    )
    approved_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True))
    approved_by_name: Mapped[str | None] = mapped_column(String(200))
    approval_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    rejection_reason: Mapped[str | None] = mapped_column(Text)

    # Relationships
    staff: Mapped["Staff"] = relationship(
        "Staff", back_populates="leave_requests", foreign_keys=[staff_id]
    )

    @property
    def days(self) -> int:
        """Inclusive day count of the request."""
        return (self.end_date - self.start_date).days + 1

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveRequestStatus.PENDING

    def __repr__(self) -> str:
        return (
            f"<LeaveRequest(id={self.id}, staff={self.staff_id}, "
            f"{self.start_date}..{self.end_date}, status={self.status})>"
        )


class LeaveBalance(Base):
    """Derived paid-leave balance of one staff member for one calendar year.

    Always overwritten wholesale by a recalculation, never patched.
    """

    __tablename__ = "leave_balances"

    id: Mapped[str] = mapped_column(String(80), primary_key=True)  # "{staff_id}_{year}"
    staff_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    staff_name: Mapped[str] = mapped_column(String(200), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    quota: Mapped[int] = mapped_column(Integer, nullable=False)
    used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pending: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    remaining: Mapped[int] = mapped_column(Integer, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    @staticmethod
    def make_id(staff_id: UUID, year: int) -> str:
        return f"{staff_id}_{year}"

    def __repr__(self) -> str:
        return (
            f"<LeaveBalance(id={self.id}, quota={self.quota}, used={self.used}, "
            f"pending={self.pending}, remaining={self.remaining})>"
        )
