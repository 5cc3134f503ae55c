"""Staff directory reads."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import execute
from app.models.staff import Staff


async def get_staff_by_id(db: AsyncSession, staff_id: UUID) -> Staff | None:
    """Get a staff member by ID."""
    result = await execute(db, select(Staff).where(Staff.id == staff_id))
    return result.scalar_one_or_none()


async def get_active_staff(db: AsyncSession) -> list[Staff]:
    """Get all active staff members."""
    result = await execute(
        db,
        select(Staff).where(Staff.is_active == True).order_by(Staff.name),
    )
    return list(result.scalars().all())
