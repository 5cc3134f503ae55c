"""Staff model."""

from functools import cached_property

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel
from app.core.permissions import Role
from app.core.role_resolver import resolve_staff_role


class Staff(BaseModel):
    """Staff member of the center. Read-only from the leave engine's side."""

    __tablename__ = "staff"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str | None] = mapped_column(String(50), unique=True)
    position: Mapped[str | None] = mapped_column(String(100))  # free-text job title
    role: Mapped[str | None] = mapped_column(String(30))  # explicit role code, wins over position
    branch: Mapped[str | None] = mapped_column(String(100))
    leave_quota: Mapped[int | None] = mapped_column(Integer)  # overrides the default quota
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default="true",
    )

    # Relationships
    leave_requests: Mapped[list["LeaveRequest"]] = relationship(
        "LeaveRequest", back_populates="staff", foreign_keys="LeaveRequest.staff_id"
    )

    @cached_property
    def resolved_role(self) -> Role:
        """Role derived from the explicit role code or the job title.

        Resolved on first access and kept for the life of the loaded record,
        which is one request for the authenticated caller.
        """
        return resolve_staff_role(self)

    def __repr__(self) -> str:
        return f"<Staff(id={self.id}, name={self.name}, position={self.position})>"
