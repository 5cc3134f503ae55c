"""Leave request lifecycle.

pending -> approved | rejected, both terminal. Every transition is validated
before anything is written and ends with a ledger recalculation of each
affected year inside the same transaction.
"""

import logging
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import commit, execute, refresh
from app.core.exceptions import LeaveValidationError, NotFoundError
from app.models.leave import LeaveCategory, LeaveRequest, LeaveRequestStatus
from app.models.staff import Staff
from app.schemas.leave import LeaveRequestCreate, LeaveRequestUpdate
from app.services import leave_balance as ledger

logger = logging.getLogger(__name__)


# ============== Validation ==============


def validate_leave_dates(start_date: date, end_date: date, today: date) -> None:
    """Check the date range and advance-notice rules.

    - no start date in the past, end not before start
    - at least LEAVE_MIN_NOTICE_DAYS of notice for any request
    - LEAVE_EXTENDED_NOTICE_DAYS of notice when the span is >= LEAVE_EXTENDED_SPAN_DAYS,
      checked first so the strictest failing rule is reported
    - LEAVE_LONG_NOTICE_DAYS of notice when the span is >= LEAVE_LONG_SPAN_DAYS
    """
    if start_date < today:
        raise LeaveValidationError("past_start_date", "Leave cannot start in the past")

    if end_date < start_date:
        raise LeaveValidationError("end_before_start", "End date must not be before start date")

    requested_days = ledger.calculate_days(start_date, end_date)
    days_until_start = (start_date - today).days

    if days_until_start < settings.LEAVE_MIN_NOTICE_DAYS:
        raise LeaveValidationError(
            "insufficient_notice",
            f"Leave must be requested at least {settings.LEAVE_MIN_NOTICE_DAYS} day(s) in advance",
            days_until_start=days_until_start,
        )

    if (
        requested_days >= settings.LEAVE_EXTENDED_SPAN_DAYS
        and days_until_start < settings.LEAVE_EXTENDED_NOTICE_DAYS
    ):
        raise LeaveValidationError(
            "notice_extended_leave",
            f"Leave of {settings.LEAVE_EXTENDED_SPAN_DAYS} or more days must be requested at least "
            f"{settings.LEAVE_EXTENDED_NOTICE_DAYS} days in advance "
            f"(only {days_until_start} day(s) left)",
            days_until_start=days_until_start,
        )

    if (
        requested_days >= settings.LEAVE_LONG_SPAN_DAYS
        and days_until_start < settings.LEAVE_LONG_NOTICE_DAYS
    ):
        raise LeaveValidationError(
            "notice_long_leave",
            f"Leave of {settings.LEAVE_LONG_SPAN_DAYS} or more days must be requested at least "
            f"{settings.LEAVE_LONG_NOTICE_DAYS} days in advance "
            f"(only {days_until_start} day(s) left)",
            days_until_start=days_until_start,
        )


async def _check_balance(
    db: AsyncSession,
    staff_id: UUID,
    start_date: date,
    end_date: date,
    category: LeaveCategory,
    *,
    exclude_request_id: UUID | None = None,
) -> None:
    check = await ledger.has_enough_balance(
        db,
        staff_id,
        start_date.year,
        start_date,
        end_date,
        category,
        exclude_request_id=exclude_request_id,
    )
    if not check.has_balance:
        raise LeaveValidationError(
            "insufficient_balance",
            f"Not enough paid leave. Remaining: {check.remaining} days, "
            f"requested: {check.requested} days",
            remaining=check.remaining,
            requested=check.requested,
        )


def _require_pending(leave: LeaveRequest) -> None:
    if not leave.is_pending:
        raise LeaveValidationError(
            "not_pending",
            f"Leave request is already {leave.status}",
        )


# ============== Queries ==============


async def get_leave_request_by_id(db: AsyncSession, request_id: UUID) -> LeaveRequest | None:
    """Get a leave request by ID."""
    result = await execute(db, select(LeaveRequest).where(LeaveRequest.id == request_id))
    return result.scalar_one_or_none()


async def _require_request(db: AsyncSession, request_id: UUID) -> LeaveRequest:
    leave = await get_leave_request_by_id(db, request_id)
    if leave is None:
        raise NotFoundError("Leave request not found")
    return leave


async def get_leave_requests(
    db: AsyncSession,
    *,
    staff_id: UUID | None = None,
    status: LeaveRequestStatus | None = None,
    category: LeaveCategory | None = None,
    skip: int = 0,
    limit: int = 100,
) -> tuple[list[LeaveRequest], int]:
    """Get leave requests with optional filters, newest first."""
    query = select(LeaveRequest)
    count_query = select(func.count(LeaveRequest.id))

    if staff_id:
        query = query.where(LeaveRequest.staff_id == staff_id)
        count_query = count_query.where(LeaveRequest.staff_id == staff_id)

    if status:
        query = query.where(LeaveRequest.status == status)
        count_query = count_query.where(LeaveRequest.status == status)

    if category:
        query = query.where(LeaveRequest.category == category)
        count_query = count_query.where(LeaveRequest.category == category)

    query = query.order_by(LeaveRequest.created_at.desc()).offset(skip).limit(limit)

    result = await execute(db, query)
    requests = list(result.scalars().all())

    count_result = await execute(db, count_query)
    total = count_result.scalar() or 0

    return requests, total


async def get_all(db: AsyncSession) -> list[LeaveRequest]:
    """All leave requests, newest first."""
    result = await execute(db, select(LeaveRequest).order_by(LeaveRequest.created_at.desc()))
    return list(result.scalars().all())


async def get_by_staff_id(db: AsyncSession, staff_id: UUID) -> list[LeaveRequest]:
    """Leave requests of one staff member, newest first."""
    result = await execute(
        db,
        select(LeaveRequest)
        .where(LeaveRequest.staff_id == staff_id)
        .order_by(LeaveRequest.created_at.desc()),
    )
    return list(result.scalars().all())


async def get_pending(db: AsyncSession) -> list[LeaveRequest]:
    """Requests awaiting a decision, newest first."""
    result = await execute(
        db,
        select(LeaveRequest)
        .where(LeaveRequest.status == LeaveRequestStatus.PENDING)
        .order_by(LeaveRequest.created_at.desc()),
    )
    return list(result.scalars().all())


async def get_approved_for_date_range(
    db: AsyncSession,
    start_date: date,
    end_date: date,
) -> list[LeaveRequest]:
    """Approved leave overlapping [start_date, end_date], for work confirmation."""
    result = await execute(
        db,
        select(LeaveRequest)
        .where(LeaveRequest.status == LeaveRequestStatus.APPROVED)
        .where(LeaveRequest.end_date >= start_date)
        .where(LeaveRequest.start_date <= end_date)
        .order_by(LeaveRequest.start_date),
    )
    return list(result.scalars().all())


# ============== Transitions ==============


async def submit(
    db: AsyncSession,
    staff: Staff,
    data: LeaveRequestCreate,
    *,
    today: date | None = None,
) -> LeaveRequest:
    """Create a pending leave request for ``staff``."""
    today = today or date.today()

    if not data.reason or not data.reason.strip():
        raise LeaveValidationError("missing_fields", "Please fill in all required fields")

    validate_leave_dates(data.start_date, data.end_date, today)

    if data.category == LeaveCategory.PAID:
        await _check_balance(db, staff.id, data.start_date, data.end_date, data.category)

    leave = LeaveRequest(
        staff_id=staff.id,
        staff_name=staff.name,
        staff_code=staff.code,
        position=staff.position,
        branch=staff.branch,
        start_date=data.start_date,
        end_date=data.end_date,
        category=data.category,
        reason=data.reason.strip(),
        status=LeaveRequestStatus.PENDING,
    )
    db.add(leave)
    await ledger.recalculate_years(
        db,
        staff.id,
        ledger.years_spanned(data.start_date, data.end_date),
        commit_changes=False,
    )
    await commit(db)
    await refresh(db, leave)

    logger.info(
        "Leave request %s submitted by staff %s (%s, %s..%s)",
        leave.id,
        staff.id,
        leave.category,
        leave.start_date,
        leave.end_date,
    )
    return leave


async def approve(
    db: AsyncSession,
    request_id: UUID,
    approver: Staff,
) -> LeaveRequest:
    """Approve a pending request."""
    leave = await _require_request(db, request_id)
    _require_pending(leave)

    leave.status = LeaveRequestStatus.APPROVED
    leave.approved_by = approver.id
    leave.approved_by_name = approver.name
    leave.approval_date = datetime.now(timezone.utc)

    await ledger.recalculate_years(
        db,
        leave.staff_id,
        ledger.years_spanned(leave.start_date, leave.end_date),
        commit_changes=False,
    )
    await commit(db)
    await refresh(db, leave)

    logger.info("Leave request %s approved by %s", leave.id, approver.id)
    return leave


async def reject(
    db: AsyncSession,
    request_id: UUID,
    approver: Staff,
    reason: str | None,
) -> LeaveRequest:
    """Reject a pending request. A non-blank reason is required."""
    leave = await _require_request(db, request_id)

    if not reason or not reason.strip():
        raise LeaveValidationError(
            "missing_rejection_reason",
            "Please enter a reason for the rejection",
        )
    _require_pending(leave)

    leave.status = LeaveRequestStatus.REJECTED
    leave.approved_by = approver.id
    leave.approved_by_name = approver.name
    leave.approval_date = datetime.now(timezone.utc)
    leave.rejection_reason = reason.strip()

    await ledger.recalculate_years(
        db,
        leave.staff_id,
        ledger.years_spanned(leave.start_date, leave.end_date),
        commit_changes=False,
    )
    await commit(db)
    await refresh(db, leave)

    logger.info("Leave request %s rejected by %s", leave.id, approver.id)
    return leave


async def update(
    db: AsyncSession,
    request_id: UUID,
    data: LeaveRequestUpdate,
    *,
    today: date | None = None,
) -> LeaveRequest:
    """Soft edit of a pending request; the status is left alone.

    A changed range or category goes through the same date, notice and
    balance checks as a submission, with this request left out of the
    balance.
    """
    today = today or date.today()
    leave = await _require_request(db, request_id)
    _require_pending(leave)

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "reason" in changes and not changes["reason"].strip():
        raise LeaveValidationError("missing_fields", "Please fill in all required fields")

    start_date = changes.get("start_date", leave.start_date)
    end_date = changes.get("end_date", leave.end_date)
    category = changes.get("category", leave.category)

    dates_changed = start_date != leave.start_date or end_date != leave.end_date
    if dates_changed:
        validate_leave_dates(start_date, end_date, today)

    if category == LeaveCategory.PAID and (dates_changed or category != leave.category):
        await _check_balance(
            db, leave.staff_id, start_date, end_date, category, exclude_request_id=leave.id
        )

    affected_years = set(ledger.years_spanned(leave.start_date, leave.end_date))
    affected_years.update(ledger.years_spanned(start_date, end_date))

    for field, value in changes.items():
        if field == "reason":
            value = value.strip()
        setattr(leave, field, value)

    await ledger.recalculate_years(db, leave.staff_id, affected_years, commit_changes=False)
    await commit(db)
    await refresh(db, leave)

    logger.info("Leave request %s edited (%s)", leave.id, ", ".join(sorted(changes)))
    return leave


async def delete(db: AsyncSession, request_id: UUID) -> None:
    """Delete a pending request. Decided requests are kept as audit records."""
    leave = await _require_request(db, request_id)
    _require_pending(leave)

    staff_id = leave.staff_id
    years = ledger.years_spanned(leave.start_date, leave.end_date)

    await db.delete(leave)
    await ledger.recalculate_years(db, staff_id, years, commit_changes=False)
    await commit(db)

    logger.info("Leave request %s deleted", request_id)
