"""Tests for management commands."""

import sys

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app import cli
from app.core.permissions import Role
from app.models.staff import Staff
from app.services import leave_balance as ledger
from tests import conftest


class TestShowPermissions:
    """Tests for printing a role's capability table."""

    def test_prints_every_module(self, capsys: pytest.CaptureFixture):
        cli.show_permissions(Role.CSKH_STAFF)

        out = capsys.readouterr().out
        assert "Permissions for role: cskh_staff" in out
        assert "wifi_management" in out
        assert "only_update_status" in out

    def test_unknown_role_exits(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(sys, "argv", ["app.cli", "show-permissions", "owner"])
        with pytest.raises(SystemExit):
            cli.main()

    def test_no_command_exits(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(sys, "argv", ["app.cli"])
        with pytest.raises(SystemExit):
            cli.main()


class TestRecalculateBalances:
    """Tests for the bulk balance rebuild."""

    async def test_rebuilds_active_staff(
        self,
        db: AsyncSession,
        gv_viet: Staff,
        ketoan: Staff,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture,
    ):
        await conftest.add_request(db, gv_viet, "2025-03-10", "2025-03-12")
        monkeypatch.setattr(cli, "async_session_maker", conftest.test_session_maker)

        await cli.recalculate_balances(2025)

        assert "Recalculated 2 balance(s) for 2025" in capsys.readouterr().out
        balance = await ledger.get_balance(db, gv_viet.id, 2025)
        assert (balance.used, balance.remaining) == (3, 9)
