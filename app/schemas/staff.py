"""Staff schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from app.core.permissions import Role


class StaffResponse(BaseModel):
    """Staff profile with the role it resolves to."""

    id: UUID
    name: str
    code: str | None
    position: str | None
    role: str | None
    resolved_role: Role
    branch: str | None
    leave_quota: int | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
