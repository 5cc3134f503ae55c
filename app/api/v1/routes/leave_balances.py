"""Leave balance API routes."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import CurrentStaff, http_error, require_permission
from app.core.exceptions import NotFoundError
from app.core.permissions import Module, PermissionAction, can_approve
from app.models.staff import Staff
from app.schemas.leave import BalanceCheckRequest, BalanceCheckResponse, LeaveBalanceResponse
from app.services import leave_balance as ledger

router = APIRouter(prefix="/leave-balances", tags=["Leave Balances"])

YearQuery = Query(None, ge=2000, le=2100, description="Calendar year, defaults to the current one")


@router.get("/me", response_model=LeaveBalanceResponse)
async def get_my_balance(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: CurrentStaff,
    year: int | None = YearQuery,
) -> LeaveBalanceResponse:
    """Get the caller's paid leave balance for a year."""
    balance = await ledger.get_or_create_balance(db, current_staff.id, year or date.today().year)
    return LeaveBalanceResponse.model_validate(balance)


@router.post("/check", response_model=BalanceCheckResponse)
async def check_balance(
    data: BalanceCheckRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: CurrentStaff,
) -> BalanceCheckResponse:
    """Check whether a prospective request fits the caller's balance. Nothing is written."""
    check = await ledger.has_enough_balance(
        db,
        current_staff.id,
        data.start_date.year,
        data.start_date,
        data.end_date,
        data.category,
    )
    return BalanceCheckResponse(
        has_balance=check.has_balance,
        remaining=check.remaining,
        requested=check.requested,
    )


@router.get("/{staff_id}", response_model=LeaveBalanceResponse)
async def get_staff_balance(
    staff_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: CurrentStaff,
    year: int | None = YearQuery,
) -> LeaveBalanceResponse:
    """
    Get a staff member's balance for a year.

    - Approvers: any staff member
    - Others: only themselves
    """
    if staff_id != current_staff.id and not can_approve(
        current_staff.resolved_role, Module.LEAVE_REQUEST
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own leave balance",
        )

    try:
        balance = await ledger.get_or_create_balance(db, staff_id, year or date.today().year)
    except NotFoundError as e:
        raise http_error(e)
    return LeaveBalanceResponse.model_validate(balance)


@router.post("/{staff_id}/recalculate", response_model=LeaveBalanceResponse)
async def recalculate_balance(
    staff_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Annotated[
        Staff, Depends(require_permission(Module.LEAVE_REQUEST, PermissionAction.APPROVE))
    ],
    year: int | None = YearQuery,
) -> LeaveBalanceResponse:
    """Rebuild a staff member's balance from their leave requests."""
    try:
        balance = await ledger.recalculate(db, staff_id, year or date.today().year)
    except NotFoundError as e:
        raise http_error(e)
    return LeaveBalanceResponse.model_validate(balance)
