"""Permission schemas."""

from pydantic import BaseModel

from app.core.permissions import (
    Module,
    Role,
    can_see_all_salaries,
    can_see_revenue,
    get_visible_menu_items,
    is_admin,
    is_cskh,
    is_cskh_leader,
    is_ketoan,
    is_office_staff,
    is_teacher,
    is_team_lead,
    lookup,
)


class CapabilityResponse(BaseModel):
    """Capabilities of a role in one module."""

    view: bool
    create: bool
    edit: bool
    delete: bool
    approve: bool
    only_own_classes: bool
    hide_parent_phone: bool
    require_approval: bool
    only_own_data: bool
    only_update_status: bool


class RoleFlags(BaseModel):
    """Role category checks used for dashboard routing."""

    is_admin: bool
    is_teacher: bool
    is_office_staff: bool
    is_team_lead: bool
    can_see_revenue: bool
    can_see_all_salaries: bool
    is_cskh: bool
    is_cskh_leader: bool
    is_ketoan: bool


class PermissionSummary(BaseModel):
    """Everything the client needs to gate navigation and actions."""

    role: Role
    menu: list[Module]
    modules: dict[Module, CapabilityResponse]
    flags: RoleFlags

    @classmethod
    def for_role(cls, role: Role) -> "PermissionSummary":
        return cls(
            role=role,
            menu=get_visible_menu_items(role),
            modules={
                module: CapabilityResponse(**lookup(role, module).to_dict())
                for module in Module
            },
            flags=RoleFlags(
                is_admin=is_admin(role),
                is_teacher=is_teacher(role),
                is_office_staff=is_office_staff(role),
                is_team_lead=is_team_lead(role),
                can_see_revenue=can_see_revenue(role),
                can_see_all_salaries=can_see_all_salaries(role),
                is_cskh=is_cskh(role),
                is_cskh_leader=is_cskh_leader(role),
                is_ketoan=is_ketoan(role),
            ),
        )
