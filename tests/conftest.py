"""Test configuration and fixtures."""

import os
import tempfile
from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import settings
from app.core.database import Base, get_db
from app.models.leave import LeaveCategory, LeaveRequest, LeaveRequestStatus
from app.models.staff import Staff
from main import app

# SQLite file by default; point TEST_DATABASE_URL at PostgreSQL to run against it
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'backoffice_test.db'}",
)

# Create test engine with NullPool to avoid connection issues
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=NullPool,
)
test_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    """Override database dependency for tests."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def setup_database() -> AsyncGenerator[None, None]:
    """Create test database tables before each test that needs it."""
    app.dependency_overrides[get_db] = override_get_db

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def db(setup_database: None) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for tests."""
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(setup_database: None) -> AsyncGenerator[AsyncClient, None]:
    """Get async HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


async def create_staff(
    db: AsyncSession,
    name: str,
    code: str,
    position: str | None,
    **kwargs,
) -> Staff:
    """Insert a staff member."""
    staff = Staff(name=name, code=code, position=position, is_active=True, **kwargs)
    db.add(staff)
    await db.commit()
    await db.refresh(staff)
    return staff


@pytest_asyncio.fixture
async def admin(db: AsyncSession) -> Staff:
    """Center manager."""
    return await create_staff(db, "Nguyen Van Quan", "AD001", "Quản lý")


@pytest_asyncio.fixture
async def cskh_lead(db: AsyncSession) -> Staff:
    """Customer care team lead (leave approver)."""
    return await create_staff(db, "Tran Thi Lan", "CS001", "Trưởng Nhóm CSKH")


@pytest_asyncio.fixture
async def cskh_staff(db: AsyncSession) -> Staff:
    """Customer care staff member."""
    return await create_staff(db, "Le Thi Hoa", "CS002", "NV CSKH")


@pytest_asyncio.fixture
async def gv_viet(db: AsyncSession) -> Staff:
    """Vietnamese teacher."""
    return await create_staff(db, "Pham Van Minh", "GV001", "Giáo Viên Việt")


@pytest_asyncio.fixture
async def ketoan(db: AsyncSession) -> Staff:
    """Accountant."""
    return await create_staff(db, "Do Thi Thu", "KT001", "Kế toán")


@pytest_asyncio.fixture
async def unknown_position(db: AsyncSession) -> Staff:
    """Staff member whose job title is not recognized."""
    return await create_staff(db, "Hoang Van Nam", "XX001", "Bảo vệ")


def make_token(staff: Staff) -> str:
    """Token as issued by the identity provider for a staff member."""
    return jwt.encode(
        {"sub": str(staff.id)},
        settings.AUTH_SECRET_KEY,
        algorithm=settings.AUTH_ALGORITHM,
    )


def auth_header(staff: Staff) -> dict[str, str]:
    """Create authorization header."""
    return {"Authorization": f"Bearer {make_token(staff)}"}


async def add_request(
    db: AsyncSession,
    staff: Staff,
    start: str,
    end: str,
    status: LeaveRequestStatus = LeaveRequestStatus.APPROVED,
    category: LeaveCategory = LeaveCategory.PAID,
) -> LeaveRequest:
    """Insert a leave request without going through the state machine."""
    request = LeaveRequest(
        staff_id=staff.id,
        staff_name=staff.name,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
        category=category,
        reason="Family matters",
        status=status,
    )
    db.add(request)
    await db.commit()
    await db.refresh(request)
    return request
