"""Leave request API routes."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import http_error, require_permission
from app.core.exceptions import NotFoundError
from app.core.permissions import (
    Module,
    PermissionAction,
    can_delete,
    can_edit,
)
from app.core.restrictions import own_data_scope
from app.models.leave import LeaveCategory, LeaveRequest, LeaveRequestStatus
from app.models.staff import Staff
from app.schemas.leave import (
    LeaveRequestCreate,
    LeaveRequestListResponse,
    LeaveRequestReject,
    LeaveRequestResponse,
    LeaveRequestUpdate,
)
from app.services import leave_request as leave_service

router = APIRouter(prefix="/leave-requests", tags=["Leave Requests"])

Viewer = Annotated[Staff, Depends(require_permission(Module.LEAVE_REQUEST, PermissionAction.VIEW))]
Submitter = Annotated[Staff, Depends(require_permission(Module.LEAVE_REQUEST, PermissionAction.CREATE))]
Approver = Annotated[Staff, Depends(require_permission(Module.LEAVE_REQUEST, PermissionAction.APPROVE))]


# ============== Helper Functions ==============


def can_manage_request(staff: Staff, leave: LeaveRequest, action: PermissionAction) -> bool:
    """Owners manage their own requests; others need the verb with an unscoped view."""
    if leave.staff_id == staff.id:
        return True
    role = staff.resolved_role
    if own_data_scope(role, Module.LEAVE_REQUEST, staff.id) is not None:
        return False
    if action == PermissionAction.EDIT:
        return can_edit(role, Module.LEAVE_REQUEST)
    return can_delete(role, Module.LEAVE_REQUEST)


async def get_visible_request(db: AsyncSession, request_id: UUID, staff: Staff) -> LeaveRequest:
    leave = await leave_service.get_leave_request_by_id(db, request_id)
    if not leave:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Leave request not found",
        )

    scope = own_data_scope(staff.resolved_role, Module.LEAVE_REQUEST, staff.id)
    if scope is not None and leave.staff_id != scope:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only access your own leave requests",
        )
    return leave


# ============== Endpoints ==============


@router.get("", response_model=LeaveRequestListResponse)
async def list_leave_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Viewer,
    staff_id: UUID | None = Query(None, description="Filter by staff ID"),
    status_filter: LeaveRequestStatus | None = Query(None, alias="status", description="Filter by status"),
    category: LeaveCategory | None = Query(None, description="Filter by leave category"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=100, description="Max number of records"),
) -> LeaveRequestListResponse:
    """
    List leave requests, newest first.

    - Approvers: all requests, can filter by staff_id
    - Others: only their own requests
    """
    scope = own_data_scope(current_staff.resolved_role, Module.LEAVE_REQUEST, current_staff.id)
    if scope is not None:
        staff_id = scope

    requests, total = await leave_service.get_leave_requests(
        db,
        staff_id=staff_id,
        status=status_filter,
        category=category,
        skip=skip,
        limit=limit,
    )

    return LeaveRequestListResponse(
        items=[LeaveRequestResponse.model_validate(r) for r in requests],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.get("/pending", response_model=list[LeaveRequestResponse])
async def list_pending_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Approver,
) -> list[LeaveRequestResponse]:
    """Requests awaiting a decision."""
    requests = await leave_service.get_pending(db)
    return [LeaveRequestResponse.model_validate(r) for r in requests]


@router.get("/approved", response_model=list[LeaveRequestResponse])
async def list_approved_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Approver,
    start_date: date = Query(..., description="First day of the period"),
    end_date: date = Query(..., description="Last day of the period"),
) -> list[LeaveRequestResponse]:
    """Approved leave overlapping a period."""
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )
    requests = await leave_service.get_approved_for_date_range(db, start_date, end_date)
    return [LeaveRequestResponse.model_validate(r) for r in requests]


@router.get("/{request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Viewer,
) -> LeaveRequestResponse:
    """Get a leave request by ID."""
    leave = await get_visible_request(db, request_id, current_staff)
    return LeaveRequestResponse.model_validate(leave)


@router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_leave_request(
    data: LeaveRequestCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Submitter,
) -> LeaveRequestResponse:
    """Submit a leave request for the caller."""
    leave = await leave_service.submit(db, current_staff, data)
    return LeaveRequestResponse.model_validate(leave)


@router.patch("/{request_id}", response_model=LeaveRequestResponse)
async def update_leave_request(
    request_id: UUID,
    data: LeaveRequestUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Viewer,
) -> LeaveRequestResponse:
    """Edit a pending leave request. Status is not changed."""
    leave = await get_visible_request(db, request_id, current_staff)
    if not can_manage_request(current_staff, leave, PermissionAction.EDIT):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions",
        )

    try:
        leave = await leave_service.update(db, request_id, data)
    except NotFoundError as e:
        raise http_error(e)
    return LeaveRequestResponse.model_validate(leave)


@router.post("/{request_id}/approve", response_model=LeaveRequestResponse)
async def approve_leave_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Approver,
) -> LeaveRequestResponse:
    """Approve a pending leave request."""
    try:
        leave = await leave_service.approve(db, request_id, current_staff)
    except NotFoundError as e:
        raise http_error(e)
    return LeaveRequestResponse.model_validate(leave)


@router.post("/{request_id}/reject", response_model=LeaveRequestResponse)
async def reject_leave_request(
    request_id: UUID,
    data: LeaveRequestReject,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Approver,
) -> LeaveRequestResponse:
    """Reject a pending leave request with a reason."""
    try:
        leave = await leave_service.reject(db, request_id, current_staff, data.reason)
    except NotFoundError as e:
        raise http_error(e)
    return LeaveRequestResponse.model_validate(leave)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_staff: Viewer,
) -> None:
    """Delete a pending leave request."""
    leave = await get_visible_request(db, request_id, current_staff)
    if not can_manage_request(current_staff, leave, PermissionAction.DELETE):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions",
        )

    try:
        await leave_service.delete(db, request_id)
    except NotFoundError as e:
        raise http_error(e)
