"""Staff API routes."""

from fastapi import APIRouter

from app.core.deps import CurrentStaff
from app.schemas.staff import StaffResponse

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.get("/me", response_model=StaffResponse)
async def get_me(current_staff: CurrentStaff) -> StaffResponse:
    """Get the caller's staff profile."""
    return StaffResponse.model_validate(current_staff)
