"""Tests for leave balance API."""

from datetime import date, timedelta
from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.leave import LeaveRequestStatus
from app.models.staff import Staff
from tests.conftest import add_request, auth_header


class TestMyBalance:
    """Tests for the caller's balance."""

    async def test_untouched_balance(self, client: AsyncClient, gv_viet: Staff):
        response = await client.get(
            "/api/v1/leave-balances/me",
            params={"year": 2025},
            headers=auth_header(gv_viet),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == f"{gv_viet.id}_2025"
        assert (data["quota"], data["used"], data["pending"], data["remaining"]) == (12, 0, 0, 12)

    async def test_balance_follows_submission(self, client: AsyncClient, gv_viet: Staff):
        start = date.today() + timedelta(days=10)
        await client.post(
            "/api/v1/leave-requests",
            json={
                "start_date": start.isoformat(),
                "end_date": (start + timedelta(days=1)).isoformat(),
                "reason": "Family wedding",
            },
            headers=auth_header(gv_viet),
        )

        response = await client.get(
            "/api/v1/leave-balances/me",
            params={"year": start.year},
            headers=auth_header(gv_viet),
        )

        data = response.json()
        assert (data["pending"], data["remaining"]) == (2, 10)


class TestStaffBalance:
    """Tests for reading and rebuilding another staff member's balance."""

    async def test_approver_reads_any(self, client: AsyncClient, gv_viet: Staff, cskh_lead: Staff):
        response = await client.get(
            f"/api/v1/leave-balances/{gv_viet.id}",
            params={"year": 2025},
            headers=auth_header(cskh_lead),
        )
        assert response.status_code == 200
        assert response.json()["staff_id"] == str(gv_viet.id)

    async def test_staff_reads_own_only(self, client: AsyncClient, gv_viet: Staff, ketoan: Staff):
        response = await client.get(
            f"/api/v1/leave-balances/{gv_viet.id}", headers=auth_header(ketoan)
        )
        assert response.status_code == 403

        response = await client.get(
            f"/api/v1/leave-balances/{ketoan.id}", headers=auth_header(ketoan)
        )
        assert response.status_code == 200

    async def test_unknown_staff(self, client: AsyncClient, admin: Staff):
        response = await client.get(
            f"/api/v1/leave-balances/{uuid4()}", headers=auth_header(admin)
        )
        assert response.status_code == 404

    async def test_recalculate(
        self, client: AsyncClient, db: AsyncSession, gv_viet: Staff, admin: Staff
    ):
        await add_request(db, gv_viet, "2025-03-10", "2025-03-12")
        await add_request(db, gv_viet, "2025-04-01", "2025-04-01", LeaveRequestStatus.PENDING)

        response = await client.post(
            f"/api/v1/leave-balances/{gv_viet.id}/recalculate",
            params={"year": 2025},
            headers=auth_header(admin),
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["used"], data["pending"], data["remaining"]) == (3, 1, 8)

    async def test_recalculate_requires_approver(
        self, client: AsyncClient, gv_viet: Staff, ketoan: Staff
    ):
        response = await client.post(
            f"/api/v1/leave-balances/{gv_viet.id}/recalculate",
            headers=auth_header(ketoan),
        )
        assert response.status_code == 403


class TestBalanceCheck:
    """Tests for the pre-submit balance check."""

    async def test_shortfall(self, client: AsyncClient, db: AsyncSession, gv_viet: Staff):
        await add_request(db, gv_viet, "2025-02-03", "2025-02-13")

        response = await client.post(
            "/api/v1/leave-balances/check",
            json={"start_date": "2025-06-02", "end_date": "2025-06-03", "category": "paid"},
            headers=auth_header(gv_viet),
        )

        assert response.status_code == 200
        assert response.json() == {"has_balance": False, "remaining": 1, "requested": 2}

    async def test_sick_leave(self, client: AsyncClient, gv_viet: Staff):
        response = await client.post(
            "/api/v1/leave-balances/check",
            json={"start_date": "2025-06-02", "end_date": "2025-06-30", "category": "sick"},
            headers=auth_header(gv_viet),
        )
        assert response.json() == {"has_balance": True, "remaining": 999, "requested": 0}

    async def test_reversed_range(self, client: AsyncClient, gv_viet: Staff):
        response = await client.post(
            "/api/v1/leave-balances/check",
            json={"start_date": "2025-06-03", "end_date": "2025-06-02"},
            headers=auth_header(gv_viet),
        )
        assert response.status_code == 422
