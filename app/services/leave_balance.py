"""Leave balance ledger.

A balance is never maintained by incrementing or decrementing counters. It
is folded from the full set of a staff member's leave requests every time
and written back wholesale, so ``remaining == quota - used - pending`` holds
after every recalculation and repeated recalculations agree.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import commit, execute
from app.core.exceptions import NotFoundError
from app.models.leave import LeaveBalance, LeaveCategory, LeaveRequest, LeaveRequestStatus
from app.models.staff import Staff
from app.services import staff as staff_service

logger = logging.getLogger(__name__)

# Reported as "remaining" for categories the balance does not gate
UNGATED_REMAINING = 999


class LeaveLike(Protocol):
    start_date: date
    end_date: date
    category: str
    status: str


@dataclass(frozen=True)
class BalanceTotals:
    """Result of folding a request set for one year."""

    quota: int
    used: int
    pending: int
    remaining: int


@dataclass(frozen=True)
class BalanceCheck:
    """Whether a prospective request fits in the remaining balance."""

    has_balance: bool
    remaining: int
    requested: int


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def calculate_days(start_date: date | str, end_date: date | str) -> int:
    """Days between two calendar dates, both endpoints included."""
    return (_as_date(end_date) - _as_date(start_date)).days + 1


def years_spanned(start_date: date, end_date: date) -> list[int]:
    """Calendar years a date range touches."""
    return list(range(start_date.year, end_date.year + 1))


def overlaps_year(start_date: date, end_date: date, year: int) -> bool:
    return not (end_date < date(year, 1, 1) or start_date > date(year, 12, 31))


def compute_balance(requests: Iterable[LeaveLike], *, year: int, quota: int) -> BalanceTotals:
    """Fold leave requests into the balance totals of one year.

    Only paid leave overlapping the year counts; approved days go to
    ``used``, pending days to ``pending`` and rejected requests are ignored.
    A request overlapping the year counts with its full day count.
    """
    used = 0
    pending = 0
    for leave in requests:
        if leave.category != LeaveCategory.PAID:
            continue
        if not overlaps_year(leave.start_date, leave.end_date, year):
            continue

        days = calculate_days(leave.start_date, leave.end_date)
        if leave.status == LeaveRequestStatus.APPROVED:
            used += days
        elif leave.status == LeaveRequestStatus.PENDING:
            pending += days

    return BalanceTotals(
        quota=quota,
        used=used,
        pending=pending,
        remaining=quota - used - pending,
    )


def get_default_quota() -> int:
    """Center-wide yearly paid leave allowance."""
    return settings.DEFAULT_LEAVE_QUOTA


def quota_for(staff: Staff) -> int:
    """Staff override if set, else the center default."""
    if staff.leave_quota is not None:
        return staff.leave_quota
    return get_default_quota()


async def _require_staff(db: AsyncSession, staff_id: UUID) -> Staff:
    staff = await staff_service.get_staff_by_id(db, staff_id)
    if staff is None:
        raise NotFoundError("Staff not found")
    return staff


async def _requests_for_staff(db: AsyncSession, staff_id: UUID) -> list[LeaveRequest]:
    result = await execute(db, select(LeaveRequest).where(LeaveRequest.staff_id == staff_id))
    return list(result.scalars().all())


async def get_balance(db: AsyncSession, staff_id: UUID, year: int) -> LeaveBalance | None:
    """Get the stored balance for (staff, year), if any."""
    result = await execute(
        db,
        select(LeaveBalance).where(LeaveBalance.id == LeaveBalance.make_id(staff_id, year)),
    )
    return result.scalar_one_or_none()


async def get_or_create_balance(db: AsyncSession, staff_id: UUID, year: int) -> LeaveBalance:
    """Return the stored balance, creating an untouched one if missing."""
    balance = await get_balance(db, staff_id, year)
    if balance is not None:
        return balance

    staff = await _require_staff(db, staff_id)
    quota = quota_for(staff)
    balance = LeaveBalance(
        id=LeaveBalance.make_id(staff_id, year),
        staff_id=staff_id,
        staff_name=staff.name,
        year=year,
        quota=quota,
        used=0,
        pending=0,
        remaining=quota,
        last_updated=datetime.now(timezone.utc),
    )
    db.add(balance)
    await commit(db)
    logger.info("Created leave balance %s with quota %d", balance.id, quota)
    return balance


async def recalculate(
    db: AsyncSession,
    staff_id: UUID,
    year: int,
    *,
    commit_changes: bool = True,
) -> LeaveBalance:
    """Rebuild the (staff, year) balance from the staff's leave requests.

    The stored value is overwritten without being read into the result.
    With ``commit_changes=False`` the caller owns the transaction.
    """
    staff = await _require_staff(db, staff_id)
    requests = await _requests_for_staff(db, staff_id)
    totals = compute_balance(requests, year=year, quota=quota_for(staff))

    balance = await get_balance(db, staff_id, year)
    if balance is None:
        balance = LeaveBalance(id=LeaveBalance.make_id(staff_id, year), staff_id=staff_id, year=year)
        db.add(balance)

    balance.staff_name = staff.name
    balance.quota = totals.quota
    balance.used = totals.used
    balance.pending = totals.pending
    balance.remaining = totals.remaining
    balance.last_updated = datetime.now(timezone.utc)

    if commit_changes:
        await commit(db)

    logger.info(
        "Recalculated leave balance %s: quota=%d used=%d pending=%d remaining=%d",
        balance.id,
        totals.quota,
        totals.used,
        totals.pending,
        totals.remaining,
    )
    return balance


async def recalculate_years(
    db: AsyncSession,
    staff_id: UUID,
    years: Iterable[int],
    *,
    commit_changes: bool = True,
) -> list[LeaveBalance]:
    """Recalculate several years of one staff member in one transaction."""
    balances = [
        await recalculate(db, staff_id, year, commit_changes=False)
        for year in sorted(set(years))
    ]
    if commit_changes:
        await commit(db)
    return balances


async def has_enough_balance(
    db: AsyncSession,
    staff_id: UUID,
    year: int,
    start_date: date | str,
    end_date: date | str,
    category: LeaveCategory,
    *,
    exclude_request_id: UUID | None = None,
) -> BalanceCheck:
    """Check a prospective request against the current remaining balance.

    Non-paid categories are never gated. The balance is folded fresh from
    the request set and nothing is written. ``exclude_request_id`` leaves a
    request out of the fold, for re-checking an edited pending request.
    """
    if category != LeaveCategory.PAID:
        return BalanceCheck(has_balance=True, remaining=UNGATED_REMAINING, requested=0)

    staff = await _require_staff(db, staff_id)
    requests = [
        r for r in await _requests_for_staff(db, staff_id) if r.id != exclude_request_id
    ]
    totals = compute_balance(requests, year=year, quota=quota_for(staff))
    requested = calculate_days(start_date, end_date)

    return BalanceCheck(
        has_balance=totals.remaining >= requested,
        remaining=totals.remaining,
        requested=requested,
    )
