"""Tests for permission, staff and health endpoints."""

from httpx import AsyncClient

from app.models.staff import Staff
from tests.conftest import auth_header


class TestHealth:
    """Tests for the health endpoint."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestMyPermissions:
    """Tests for the caller's permission summary."""

    async def test_teacher_summary(self, client: AsyncClient, gv_viet: Staff):
        response = await client.get("/api/v1/permissions/me", headers=auth_header(gv_viet))

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "gv_viet"
        assert "settings" not in data["menu"]
        assert "leave_request" in data["menu"]
        assert data["modules"]["classes"]["only_own_classes"] is True
        assert data["modules"]["classes"]["hide_parent_phone"] is True
        assert data["modules"]["leave_request"]["approve"] is False
        assert data["flags"]["is_teacher"] is True
        assert data["flags"]["is_admin"] is False

    async def test_unknown_position_gets_default_role(
        self, client: AsyncClient, unknown_position: Staff
    ):
        response = await client.get(
            "/api/v1/permissions/me", headers=auth_header(unknown_position)
        )

        data = response.json()
        assert data["role"] == "tro_giang"
        assert data["modules"]["leave_request"]["view"] is False
        assert "leave_request" not in data["menu"]

    async def test_every_module_listed(self, client: AsyncClient, admin: Staff):
        response = await client.get("/api/v1/permissions/me", headers=auth_header(admin))

        data = response.json()
        assert len(data["modules"]) == 35
        assert data["flags"]["can_see_all_salaries"] is True


class TestRolePermissions:
    """Tests for reading another role's capabilities."""

    async def test_admin_reads_role(self, client: AsyncClient, admin: Staff):
        response = await client.get(
            "/api/v1/permissions/roles/cskh_staff", headers=auth_header(admin)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "cskh_staff"
        assert data["modules"]["leads"]["only_update_status"] is True

    async def test_requires_settings_access(self, client: AsyncClient, cskh_lead: Staff):
        response = await client.get(
            "/api/v1/permissions/roles/admin", headers=auth_header(cskh_lead)
        )
        assert response.status_code == 403

    async def test_unknown_role(self, client: AsyncClient, admin: Staff):
        response = await client.get(
            "/api/v1/permissions/roles/owner", headers=auth_header(admin)
        )
        assert response.status_code == 422


class TestStaffMe:
    """Tests for the caller's profile."""

    async def test_profile(self, client: AsyncClient, ketoan: Staff):
        response = await client.get("/api/v1/staff/me", headers=auth_header(ketoan))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(ketoan.id)
        assert data["position"] == "Kế toán"
        assert data["resolved_role"] == "ketoan"
