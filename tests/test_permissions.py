"""Tests for the permission table and its queries."""

import pytest

from app.core.permissions import (
    DENIED,
    ROLE_PERMISSIONS,
    WORKFLOW_MODULES,
    CapabilityRecord,
    Module,
    PermissionAction,
    Role,
    can_approve,
    can_create,
    can_delete,
    can_edit,
    can_see_all_salaries,
    can_see_revenue,
    can_view,
    get_module_permission,
    get_visible_menu_items,
    has_permission,
    is_admin,
    is_cskh,
    is_cskh_leader,
    is_ketoan,
    is_office_staff,
    is_teacher,
    is_team_lead,
    lookup,
    requires_approval,
    should_hide_parent_phone,
    should_only_update_status,
    should_show_only_own_classes,
    should_show_only_own_data,
)


class TestTableShape:
    """Tests for the completeness of the permission table."""

    def test_every_role_has_a_row(self):
        """Test that no role is missing from the table."""
        assert set(ROLE_PERMISSIONS) == set(Role)

    def test_approve_only_in_workflow_modules(self):
        """Test that approve never appears outside workflow modules."""
        for role, modules in ROLE_PERMISSIONS.items():
            for module, record in modules.items():
                if module not in WORKFLOW_MODULES:
                    assert record.approve is False, (role, module)

    def test_workflow_modules(self):
        """Test the set of approval-bearing modules."""
        assert WORKFLOW_MODULES == {
            Module.WORK_CONFIRMATION,
            Module.LEAVE_REQUEST,
            Module.INVOICES,
        }

    def test_closed_enumerations(self):
        """Test the size of the role and module sets."""
        assert len(Role) == 11
        assert len(Module) == 35


class TestLookup:
    """Tests for total lookups."""

    @pytest.mark.parametrize("role", list(Role))
    def test_every_pair_and_action_answers(self, role: Role):
        """Test that every role x module x action returns a bool."""
        for module in Module:
            assert isinstance(lookup(role, module), CapabilityRecord)
            for action in PermissionAction:
                assert has_permission(role, module, action) in (True, False)

    def test_missing_entry_is_denied(self):
        """Test that an absent pair falls back to all-false."""
        assert get_module_permission(Role.GV_NUOCNGOAI, Module.LEAVE_REQUEST) is None
        assert lookup(Role.GV_NUOCNGOAI, Module.LEAVE_REQUEST) == DENIED
        assert lookup(Role.TRO_GIANG, Module.LEAVE_REQUEST) == DENIED

    def test_denied_grants_nothing(self):
        """Test that the fallback record has every field false."""
        assert not any(DENIED.to_dict().values())

    def test_get_module_permission_returns_entry(self):
        """Test the raw entry accessor."""
        record = get_module_permission(Role.ADMIN, Module.SETTINGS)
        assert record is not None
        assert record.view and record.create and record.edit and record.delete

    def test_has_permission_accepts_action_strings(self):
        """Test that plain action names are accepted."""
        assert has_permission(Role.ADMIN, Module.LEAVE_REQUEST, "approve") is True
        assert has_permission(Role.KETOAN, Module.LEAVE_REQUEST, "approve") is False


class TestVerbs:
    """Tests for verb queries on concrete table rows."""

    def test_admin_manages_leave(self):
        """Test admin's full leave_request capability."""
        assert can_view(Role.ADMIN, Module.LEAVE_REQUEST)
        assert can_create(Role.ADMIN, Module.LEAVE_REQUEST)
        assert can_edit(Role.ADMIN, Module.LEAVE_REQUEST)
        assert can_delete(Role.ADMIN, Module.LEAVE_REQUEST)
        assert can_approve(Role.ADMIN, Module.LEAVE_REQUEST)

    @pytest.mark.parametrize("role", [Role.CSKH_LEAD, Role.CM_LEAD, Role.SALE_LEAD])
    def test_team_leads_approve_leave(self, role: Role):
        """Test that team leads approve leave but cannot delete it."""
        assert can_approve(role, Module.LEAVE_REQUEST)
        assert not can_delete(role, Module.LEAVE_REQUEST)

    @pytest.mark.parametrize(
        "role", [Role.CSKH_STAFF, Role.CM_STAFF, Role.SALE_STAFF, Role.KETOAN, Role.GV_VIET]
    )
    def test_others_submit_but_cannot_approve(self, role: Role):
        """Test that regular staff submit leave without approving it."""
        assert can_create(role, Module.LEAVE_REQUEST)
        assert not can_approve(role, Module.LEAVE_REQUEST)

    def test_only_admin_sees_settings(self):
        """Test settings visibility."""
        assert [r for r in Role if can_view(r, Module.SETTINGS)] == [Role.ADMIN]


class TestQualifiers:
    """Tests for qualifier queries."""

    @pytest.mark.parametrize("role", [Role.GV_VIET, Role.GV_NUOCNGOAI, Role.TRO_GIANG])
    def test_teachers_see_own_classes_without_parent_phone(self, role: Role):
        """Test teaching roles' class restrictions."""
        assert should_show_only_own_classes(role, Module.CLASSES)
        assert should_hide_parent_phone(role, Module.CLASSES)

    def test_staff_update_lead_status_only(self):
        """Test the status-only qualifier on leads."""
        assert should_only_update_status(Role.CSKH_STAFF, Module.LEADS)
        assert should_only_update_status(Role.SALE_STAFF, Module.LEADS)
        assert not should_only_update_status(Role.ADMIN, Module.LEADS)

    def test_invoices_need_approval(self):
        """Test the second-party sign-off qualifier."""
        assert requires_approval(Role.CSKH_STAFF, Module.INVOICES)
        assert not requires_approval(Role.ADMIN, Module.INVOICES)

    def test_own_salary_data(self):
        """Test the own-record qualifier."""
        assert should_show_only_own_data(Role.CSKH_LEAD, Module.SALARY_STAFF)
        assert not should_show_only_own_data(Role.ADMIN, Module.SALARY_STAFF)

    def test_qualifiers_false_when_denied(self):
        """Test that absent entries carry no qualifiers."""
        assert not should_show_only_own_classes(Role.TRO_GIANG, Module.LEAVE_REQUEST)
        assert not should_show_only_own_data(Role.TRO_GIANG, Module.LEAVE_REQUEST)


class TestMenu:
    """Tests for visible menu items."""

    @pytest.mark.parametrize("role", list(Role))
    def test_menu_matches_view(self, role: Role):
        """Test that the menu is exactly the viewable modules."""
        assert set(get_visible_menu_items(role)) == {m for m in Module if can_view(role, m)}

    def test_menu_keeps_declaration_order(self):
        """Test the menu order."""
        menu = get_visible_menu_items(Role.ADMIN)
        assert menu == [m for m in Module if m in menu]
        assert menu[0] == Module.DASHBOARD

    def test_default_role_has_no_leave_menu(self):
        """Test that the fail-closed role cannot see leave requests."""
        assert Module.LEAVE_REQUEST not in get_visible_menu_items(Role.TRO_GIANG)


class TestRoleCategories:
    """Tests for role category helpers."""

    def test_admin(self):
        assert is_admin(Role.ADMIN)
        assert not is_admin(Role.CSKH_LEAD)

    def test_teacher_and_office_are_disjoint(self):
        for role in Role:
            assert not (is_teacher(role) and is_office_staff(role))
        assert is_teacher(Role.TRO_GIANG)
        assert is_office_staff(Role.KETOAN)
        assert not is_office_staff(Role.ADMIN)

    def test_team_leads(self):
        assert {r for r in Role if is_team_lead(r)} == {
            Role.ADMIN,
            Role.CSKH_LEAD,
            Role.CM_LEAD,
            Role.SALE_LEAD,
        }

    def test_revenue_and_salaries(self):
        assert can_see_revenue(Role.KETOAN)
        assert not can_see_revenue(Role.CM_LEAD)
        assert {r for r in Role if can_see_all_salaries(r)} == {Role.ADMIN, Role.KETOAN}

    def test_cskh_and_ketoan(self):
        assert is_cskh(Role.CSKH_STAFF) and is_cskh(Role.CSKH_LEAD)
        assert is_cskh_leader(Role.CSKH_LEAD)
        assert not is_cskh_leader(Role.CSKH_STAFF)
        assert is_ketoan(Role.KETOAN)
