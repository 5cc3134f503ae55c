"""Roles, modules and the role/module capability table."""

from dataclasses import dataclass, fields
from enum import Enum


class Role(str, Enum):
    """Organizational roles of the center."""

    # Management
    ADMIN = "admin"
    # Training
    GV_VIET = "gv_viet"  # Vietnamese teacher
    GV_NUOCNGOAI = "gv_nuocngoai"  # Foreign teacher
    TRO_GIANG = "tro_giang"  # Teaching assistant
    # Office - customer care
    CSKH_LEAD = "cskh_lead"
    CSKH_STAFF = "cskh_staff"
    # Office - academic
    CM_LEAD = "cm_lead"
    CM_STAFF = "cm_staff"
    # Office - sales
    SALE_LEAD = "sale_lead"
    SALE_STAFF = "sale_staff"
    # Office - accounting
    KETOAN = "ketoan"


class Module(str, Enum):
    """Functional areas of the back-office gated by permissions."""

    DASHBOARD = "dashboard"
    CLASSES = "classes"
    SCHEDULE = "schedule"
    HOLIDAYS = "holidays"
    ATTENDANCE = "attendance"
    ATTENDANCE_HISTORY = "attendance_history"
    ENROLLMENT_HISTORY = "enrollment_history"
    TUTORING = "tutoring"
    HOMEWORK = "homework"
    STUDENTS = "students"
    STUDENTS_RESERVED = "students_reserved"
    STUDENTS_DROPPED = "students_dropped"
    STUDENTS_TRIAL = "students_trial"
    PARENTS = "parents"
    FEEDBACK = "feedback"
    LEADS = "leads"
    CAMPAIGNS = "campaigns"
    STAFF = "staff"
    SALARY_CONFIG = "salary_config"
    WORK_CONFIRMATION = "work_confirmation"
    LEAVE_REQUEST = "leave_request"
    SALARY_TEACHER = "salary_teacher"
    SALARY_STAFF = "salary_staff"
    CONTRACTS = "contracts"
    INVOICES = "invoices"
    REVENUE = "revenue"
    DEBT = "debt"
    REPORTS_TRAINING = "reports_training"
    REPORTS_FINANCE = "reports_finance"
    REPORTS_LEARNING = "reports_learning"
    SETTINGS = "settings"
    REWARD_PENALTY = "reward_penalty"
    PERSONAL_PROFILE = "personal_profile"
    CHECKIN = "checkin"
    WIFI_MANAGEMENT = "wifi_management"


class PermissionAction(str, Enum):
    """Verbs a capability record grants."""

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    APPROVE = "approve"


# Modules that carry an approval workflow; ``approve`` is meaningless elsewhere
WORKFLOW_MODULES = frozenset(
    {Module.WORK_CONFIRMATION, Module.LEAVE_REQUEST, Module.INVOICES}
)


@dataclass(frozen=True)
class CapabilityRecord:
    """What one role may do in one module.

    The qualifier flags never grant anything on their own; they narrow the
    verbs above them (own classes only, own record only, status-only edits,
    redacted parent phone, second-party sign-off).
    """

    view: bool = False
    create: bool = False
    edit: bool = False
    delete: bool = False
    approve: bool = False
    only_own_classes: bool = False
    hide_parent_phone: bool = False
    require_approval: bool = False
    only_own_data: bool = False
    only_update_status: bool = False

    def allows(self, action: PermissionAction) -> bool:
        return getattr(self, action.value) is True

    def to_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DENIED = CapabilityRecord()


def _cap(*actions: str, **qualifiers: bool) -> CapabilityRecord:
    return CapabilityRecord(**{action: True for action in actions}, **qualifiers)


FULL = _cap("view", "create", "edit", "delete")
MANAGE = _cap("view", "create", "edit")
VIEW = _cap("view")
VIEW_CREATE = _cap("view", "create")
OWN_PROFILE = _cap("view", "edit")


# ========================================
# Permission matrix by role
#
# Missing (role, module) pairs are equivalent to DENIED; use lookup() rather
# than indexing this mapping directly.
# ========================================
ROLE_PERMISSIONS: dict[Role, dict[Module, CapabilityRecord]] = {
    # Admin - full access
    Role.ADMIN: {
        Module.DASHBOARD: FULL,
        Module.CLASSES: FULL,
        Module.SCHEDULE: FULL,
        Module.HOLIDAYS: FULL,
        Module.ATTENDANCE: FULL,
        Module.ATTENDANCE_HISTORY: FULL,
        Module.ENROLLMENT_HISTORY: FULL,
        Module.TUTORING: FULL,
        Module.HOMEWORK: FULL,
        Module.STUDENTS: FULL,
        Module.STUDENTS_RESERVED: FULL,
        Module.STUDENTS_DROPPED: FULL,
        Module.STUDENTS_TRIAL: FULL,
        Module.PARENTS: FULL,
        Module.FEEDBACK: FULL,
        Module.LEADS: FULL,
        Module.CAMPAIGNS: FULL,
        Module.STAFF: FULL,
        Module.SALARY_CONFIG: FULL,
        Module.WORK_CONFIRMATION: _cap("view", "create", "edit", "delete", "approve"),
        Module.LEAVE_REQUEST: _cap("view", "create", "edit", "delete", "approve"),
        Module.SALARY_TEACHER: FULL,
        Module.SALARY_STAFF: FULL,
        Module.CONTRACTS: FULL,
        Module.INVOICES: _cap("view", "create", "edit", "delete", "approve"),
        Module.REVENUE: FULL,
        Module.DEBT: FULL,
        Module.REPORTS_TRAINING: FULL,
        Module.REPORTS_FINANCE: FULL,
        Module.REPORTS_LEARNING: FULL,
        Module.SETTINGS: FULL,
        Module.REWARD_PENALTY: FULL,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: FULL,
        Module.WIFI_MANAGEMENT: FULL,
    },
    # Customer care lead - sees revenue
    Role.CSKH_LEAD: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: MANAGE,
        Module.SCHEDULE: MANAGE,
        Module.HOLIDAYS: MANAGE,
        Module.ATTENDANCE: MANAGE,
        Module.ATTENDANCE_HISTORY: VIEW,
        Module.ENROLLMENT_HISTORY: MANAGE,
        Module.TUTORING: MANAGE,
        Module.HOMEWORK: MANAGE,
        Module.STUDENTS: MANAGE,
        Module.STUDENTS_RESERVED: MANAGE,
        Module.STUDENTS_DROPPED: MANAGE,
        Module.STUDENTS_TRIAL: MANAGE,
        Module.PARENTS: MANAGE,
        Module.FEEDBACK: MANAGE,
        Module.LEADS: MANAGE,
        Module.CAMPAIGNS: MANAGE,
        Module.STAFF: VIEW,
        Module.SALARY_CONFIG: DENIED,
        Module.WORK_CONFIRMATION: _cap("view", "create", "edit", "approve"),
        Module.LEAVE_REQUEST: _cap("view", "create", "edit", "approve"),
        Module.SALARY_TEACHER: DENIED,
        Module.SALARY_STAFF: _cap("view", only_own_data=True),
        Module.CONTRACTS: MANAGE,
        Module.INVOICES: _cap("view", "create", "edit", require_approval=True),
        Module.REVENUE: VIEW,
        Module.DEBT: MANAGE,
        Module.REPORTS_TRAINING: VIEW,
        Module.REPORTS_FINANCE: VIEW,
        Module.REPORTS_LEARNING: VIEW,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Customer care staff - no revenue, no debt
    Role.CSKH_STAFF: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: VIEW,
        Module.SCHEDULE: VIEW,
        Module.HOLIDAYS: VIEW,
        Module.ATTENDANCE: MANAGE,
        Module.ATTENDANCE_HISTORY: VIEW,
        Module.ENROLLMENT_HISTORY: MANAGE,
        Module.TUTORING: MANAGE,
        Module.HOMEWORK: MANAGE,
        Module.STUDENTS: MANAGE,
        Module.STUDENTS_RESERVED: MANAGE,
        Module.STUDENTS_DROPPED: MANAGE,
        Module.STUDENTS_TRIAL: MANAGE,
        Module.PARENTS: MANAGE,
        Module.FEEDBACK: MANAGE,
        Module.LEADS: _cap("view", "create", "edit", only_update_status=True),
        Module.CAMPAIGNS: VIEW,
        Module.STAFF: DENIED,
        Module.SALARY_CONFIG: DENIED,
        Module.WORK_CONFIRMATION: MANAGE,
        Module.LEAVE_REQUEST: MANAGE,
        Module.SALARY_TEACHER: DENIED,
        Module.SALARY_STAFF: _cap("view", only_own_data=True),
        Module.CONTRACTS: MANAGE,
        Module.INVOICES: _cap("view", "create", "edit", require_approval=True),
        Module.REVENUE: DENIED,
        Module.DEBT: DENIED,
        Module.REPORTS_TRAINING: VIEW,
        Module.REPORTS_FINANCE: DENIED,
        Module.REPORTS_LEARNING: VIEW,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Academic lead - no sales, no finance
    Role.CM_LEAD: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: MANAGE,
        Module.SCHEDULE: MANAGE,
        Module.HOLIDAYS: MANAGE,
        Module.ATTENDANCE: MANAGE,
        Module.ATTENDANCE_HISTORY: VIEW,
        Module.ENROLLMENT_HISTORY: MANAGE,
        Module.TUTORING: MANAGE,
        Module.HOMEWORK: MANAGE,
        Module.STUDENTS: MANAGE,
        Module.STUDENTS_RESERVED: MANAGE,
        Module.STUDENTS_DROPPED: MANAGE,
        Module.STUDENTS_TRIAL: MANAGE,
        Module.PARENTS: MANAGE,
        Module.FEEDBACK: MANAGE,
        Module.LEADS: DENIED,
        Module.CAMPAIGNS: DENIED,
        Module.STAFF: DENIED,
        Module.SALARY_CONFIG: DENIED,
        Module.WORK_CONFIRMATION: _cap("view", "create", "edit", "approve"),
        Module.LEAVE_REQUEST: _cap("view", "create", "edit", "approve"),
        Module.SALARY_TEACHER: DENIED,
        Module.SALARY_STAFF: _cap("view", only_own_data=True),
        Module.CONTRACTS: DENIED,
        Module.INVOICES: DENIED,
        Module.REVENUE: DENIED,
        Module.DEBT: DENIED,
        Module.REPORTS_TRAINING: VIEW,
        Module.REPORTS_FINANCE: DENIED,
        Module.REPORTS_LEARNING: VIEW,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Academic staff
    Role.CM_STAFF: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: VIEW,
        Module.SCHEDULE: VIEW,
        Module.HOLIDAYS: VIEW,
        Module.ATTENDANCE: MANAGE,
        Module.ATTENDANCE_HISTORY: VIEW,
        Module.ENROLLMENT_HISTORY: MANAGE,
        Module.TUTORING: MANAGE,
        Module.HOMEWORK: MANAGE,
        Module.STUDENTS: MANAGE,
        Module.STUDENTS_RESERVED: MANAGE,
        Module.STUDENTS_DROPPED: MANAGE,
        Module.STUDENTS_TRIAL: MANAGE,
        Module.PARENTS: MANAGE,
        Module.FEEDBACK: MANAGE,
        Module.LEADS: DENIED,
        Module.CAMPAIGNS: DENIED,
        Module.STAFF: DENIED,
        Module.SALARY_CONFIG: DENIED,
        Module.WORK_CONFIRMATION: MANAGE,
        Module.LEAVE_REQUEST: MANAGE,
        Module.SALARY_TEACHER: DENIED,
        Module.SALARY_STAFF: _cap("view", only_own_data=True),
        Module.CONTRACTS: DENIED,
        Module.INVOICES: DENIED,
        Module.REVENUE: DENIED,
        Module.DEBT: DENIED,
        Module.REPORTS_TRAINING: VIEW,
        Module.REPORTS_FINANCE: DENIED,
        Module.REPORTS_LEARNING: VIEW,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Sales lead - same shape as the customer care lead
    Role.SALE_LEAD: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: MANAGE,
        Module.SCHEDULE: MANAGE,
        Module.HOLIDAYS: MANAGE,
        Module.ATTENDANCE: MANAGE,
        Module.ATTENDANCE_HISTORY: VIEW,
        Module.ENROLLMENT_HISTORY: MANAGE,
        Module.TUTORING: MANAGE,
        Module.HOMEWORK: MANAGE,
        Module.STUDENTS: MANAGE,
        Module.STUDENTS_RESERVED: MANAGE,
        Module.STUDENTS_DROPPED: MANAGE,
        Module.STUDENTS_TRIAL: MANAGE,
        Module.PARENTS: MANAGE,
        Module.FEEDBACK: MANAGE,
        Module.LEADS: MANAGE,
        Module.CAMPAIGNS: MANAGE,
        Module.STAFF: VIEW,
        Module.SALARY_CONFIG: DENIED,
        Module.WORK_CONFIRMATION: _cap("view", "create", "edit", "approve"),
        Module.LEAVE_REQUEST: _cap("view", "create", "edit", "approve"),
        Module.SALARY_TEACHER: DENIED,
        Module.SALARY_STAFF: _cap("view", only_own_data=True),
        Module.CONTRACTS: MANAGE,
        Module.INVOICES: _cap("view", "create", "edit", require_approval=True),
        Module.REVENUE: VIEW,
        Module.DEBT: MANAGE,
        Module.REPORTS_TRAINING: VIEW,
        Module.REPORTS_FINANCE: VIEW,
        Module.REPORTS_LEARNING: VIEW,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Sales staff
    Role.SALE_STAFF: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: VIEW,
        Module.SCHEDULE: VIEW,
        Module.HOLIDAYS: VIEW,
        Module.ATTENDANCE: MANAGE,
        Module.ATTENDANCE_HISTORY: VIEW,
        Module.ENROLLMENT_HISTORY: MANAGE,
        Module.TUTORING: MANAGE,
        Module.HOMEWORK: MANAGE,
        Module.STUDENTS: MANAGE,
        Module.STUDENTS_RESERVED: MANAGE,
        Module.STUDENTS_DROPPED: MANAGE,
        Module.STUDENTS_TRIAL: MANAGE,
        Module.PARENTS: MANAGE,
        Module.FEEDBACK: MANAGE,
        Module.LEADS: _cap("view", "create", "edit", only_update_status=True),
        Module.CAMPAIGNS: VIEW,
        Module.STAFF: DENIED,
        Module.SALARY_CONFIG: DENIED,
        Module.WORK_CONFIRMATION: MANAGE,
        Module.LEAVE_REQUEST: MANAGE,
        Module.SALARY_TEACHER: DENIED,
        Module.SALARY_STAFF: _cap("view", only_own_data=True),
        Module.CONTRACTS: MANAGE,
        Module.INVOICES: _cap("view", "create", "edit", require_approval=True),
        Module.REVENUE: DENIED,
        Module.DEBT: MANAGE,
        Module.REPORTS_TRAINING: VIEW,
        Module.REPORTS_FINANCE: DENIED,
        Module.REPORTS_LEARNING: VIEW,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Accounting
    Role.KETOAN: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: MANAGE,
        Module.SCHEDULE: MANAGE,
        Module.HOLIDAYS: MANAGE,
        Module.ATTENDANCE: MANAGE,
        Module.ATTENDANCE_HISTORY: VIEW,
        Module.ENROLLMENT_HISTORY: VIEW,
        Module.TUTORING: MANAGE,
        Module.HOMEWORK: MANAGE,
        Module.STUDENTS: VIEW,
        Module.STUDENTS_RESERVED: VIEW,
        Module.STUDENTS_DROPPED: VIEW,
        Module.STUDENTS_TRIAL: DENIED,
        Module.PARENTS: VIEW,
        Module.FEEDBACK: DENIED,
        Module.LEADS: DENIED,
        Module.CAMPAIGNS: DENIED,
        Module.STAFF: VIEW,
        Module.SALARY_CONFIG: MANAGE,
        Module.WORK_CONFIRMATION: VIEW,
        Module.LEAVE_REQUEST: VIEW_CREATE,
        Module.SALARY_TEACHER: MANAGE,
        Module.SALARY_STAFF: MANAGE,
        Module.CONTRACTS: MANAGE,
        Module.INVOICES: MANAGE,  # no delete
        Module.REVENUE: MANAGE,
        Module.DEBT: MANAGE,
        Module.REPORTS_TRAINING: VIEW,
        Module.REPORTS_FINANCE: VIEW_CREATE,
        Module.REPORTS_LEARNING: VIEW,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Vietnamese teacher - own classes, parent phones hidden
    Role.GV_VIET: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: _cap("view", only_own_classes=True, hide_parent_phone=True),
        Module.SCHEDULE: _cap("view", only_own_classes=True),
        Module.HOLIDAYS: VIEW,
        Module.ATTENDANCE: _cap("view", "create", "edit", only_own_classes=True),
        Module.ATTENDANCE_HISTORY: _cap("view", only_own_classes=True),
        Module.ENROLLMENT_HISTORY: DENIED,
        Module.TUTORING: _cap("view", "create", "edit", only_own_classes=True),
        Module.HOMEWORK: _cap("view", "create", "edit", only_own_classes=True),
        Module.STUDENTS: _cap("view", only_own_classes=True),
        Module.STUDENTS_RESERVED: _cap("view", only_own_classes=True),
        Module.STUDENTS_DROPPED: _cap("view", only_own_classes=True),
        Module.STUDENTS_TRIAL: DENIED,
        Module.PARENTS: DENIED,
        Module.FEEDBACK: _cap("view", only_own_classes=True),
        Module.LEADS: DENIED,
        Module.CAMPAIGNS: DENIED,
        Module.STAFF: DENIED,
        Module.SALARY_CONFIG: _cap("view", only_own_data=True),
        Module.WORK_CONFIRMATION: DENIED,
        Module.LEAVE_REQUEST: VIEW_CREATE,
        Module.SALARY_TEACHER: VIEW,
        Module.SALARY_STAFF: DENIED,
        Module.CONTRACTS: DENIED,
        Module.INVOICES: DENIED,
        Module.REVENUE: DENIED,
        Module.DEBT: DENIED,
        Module.REPORTS_TRAINING: _cap("view", only_own_classes=True),
        Module.REPORTS_FINANCE: DENIED,
        Module.REPORTS_LEARNING: DENIED,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Foreign teacher - no leave_request row
    Role.GV_NUOCNGOAI: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: _cap("view", only_own_classes=True, hide_parent_phone=True),
        Module.SCHEDULE: _cap("view", only_own_classes=True),
        Module.HOLIDAYS: VIEW,
        Module.ATTENDANCE: _cap("view", "create", "edit", only_own_classes=True),
        Module.ATTENDANCE_HISTORY: _cap("view", only_own_classes=True),
        Module.ENROLLMENT_HISTORY: DENIED,
        Module.TUTORING: _cap("view", "create", "edit", only_own_classes=True),
        Module.HOMEWORK: _cap("view", "create", "edit", only_own_classes=True),
        Module.STUDENTS: _cap("view", only_own_classes=True),
        Module.STUDENTS_RESERVED: _cap("view", only_own_classes=True),
        Module.STUDENTS_DROPPED: _cap("view", only_own_classes=True),
        Module.STUDENTS_TRIAL: DENIED,
        Module.PARENTS: DENIED,
        Module.FEEDBACK: _cap("view", only_own_classes=True),
        Module.LEADS: DENIED,
        Module.CAMPAIGNS: DENIED,
        Module.STAFF: DENIED,
        Module.SALARY_CONFIG: _cap("view", only_own_data=True),
        Module.WORK_CONFIRMATION: DENIED,
        Module.SALARY_TEACHER: VIEW,
        Module.SALARY_STAFF: DENIED,
        Module.CONTRACTS: DENIED,
        Module.INVOICES: DENIED,
        Module.REVENUE: DENIED,
        Module.DEBT: DENIED,
        Module.REPORTS_TRAINING: _cap("view", only_own_classes=True),
        Module.REPORTS_FINANCE: DENIED,
        Module.REPORTS_LEARNING: DENIED,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
    # Teaching assistant - the fail-closed default role, no leave_request row
    Role.TRO_GIANG: {
        Module.DASHBOARD: VIEW,
        Module.CLASSES: _cap("view", only_own_classes=True, hide_parent_phone=True),
        Module.SCHEDULE: _cap("view", only_own_classes=True),
        Module.HOLIDAYS: VIEW,
        Module.ATTENDANCE: _cap("view", "create", "edit", only_own_classes=True),
        Module.ATTENDANCE_HISTORY: _cap("view", only_own_classes=True),
        Module.ENROLLMENT_HISTORY: DENIED,
        Module.TUTORING: _cap("view", "create", "edit", only_own_classes=True),
        Module.HOMEWORK: _cap("view", "create", "edit", only_own_classes=True),
        Module.STUDENTS: _cap("view", only_own_classes=True),
        Module.STUDENTS_RESERVED: _cap("view", only_own_classes=True),
        Module.STUDENTS_DROPPED: _cap("view", only_own_classes=True),
        Module.STUDENTS_TRIAL: DENIED,
        Module.PARENTS: DENIED,
        Module.FEEDBACK: _cap("view", only_own_classes=True),
        Module.LEADS: DENIED,
        Module.CAMPAIGNS: DENIED,
        Module.STAFF: DENIED,
        Module.SALARY_CONFIG: _cap("view", only_own_data=True),
        Module.WORK_CONFIRMATION: DENIED,
        Module.SALARY_TEACHER: VIEW,
        Module.SALARY_STAFF: DENIED,
        Module.CONTRACTS: DENIED,
        Module.INVOICES: DENIED,
        Module.REVENUE: DENIED,
        Module.DEBT: DENIED,
        Module.REPORTS_TRAINING: _cap("view", only_own_classes=True),
        Module.REPORTS_FINANCE: DENIED,
        Module.REPORTS_LEARNING: DENIED,
        Module.SETTINGS: DENIED,
        Module.REWARD_PENALTY: VIEW,
        Module.PERSONAL_PROFILE: OWN_PROFILE,
        Module.CHECKIN: VIEW_CREATE,
        Module.WIFI_MANAGEMENT: DENIED,
    },
}


def _check_table() -> None:
    """Fail at import if a role has no row or approve leaks outside workflows."""
    missing = set(Role) - set(ROLE_PERMISSIONS)
    if missing:
        names = ", ".join(sorted(r.value for r in missing))
        raise RuntimeError(f"ROLE_PERMISSIONS has no row for: {names}")

    for role, modules in ROLE_PERMISSIONS.items():
        for module, record in modules.items():
            if record.approve and module not in WORKFLOW_MODULES:
                raise RuntimeError(
                    f"approve granted outside a workflow module: {role.value}/{module.value}"
                )


_check_table()


# ========================================
# Queries
# ========================================


def lookup(role: Role, module: Module) -> CapabilityRecord:
    """Capability record for a role in a module; DENIED when there is no entry."""
    return ROLE_PERMISSIONS.get(role, {}).get(module, DENIED)


def get_module_permission(role: Role, module: Module) -> CapabilityRecord | None:
    """The table entry itself, or None if the pair is not listed."""
    return ROLE_PERMISSIONS.get(role, {}).get(module)


def has_permission(role: Role, module: Module, action: PermissionAction) -> bool:
    """Check if a role may perform an action in a module."""
    return lookup(role, module).allows(PermissionAction(action))


def can_view(role: Role, module: Module) -> bool:
    return has_permission(role, module, PermissionAction.VIEW)


def can_create(role: Role, module: Module) -> bool:
    return has_permission(role, module, PermissionAction.CREATE)


def can_edit(role: Role, module: Module) -> bool:
    return has_permission(role, module, PermissionAction.EDIT)


def can_delete(role: Role, module: Module) -> bool:
    return has_permission(role, module, PermissionAction.DELETE)


def can_approve(role: Role, module: Module) -> bool:
    return has_permission(role, module, PermissionAction.APPROVE)


def should_show_only_own_classes(role: Role, module: Module) -> bool:
    return lookup(role, module).only_own_classes


def should_hide_parent_phone(role: Role, module: Module) -> bool:
    return lookup(role, module).hide_parent_phone


def requires_approval(role: Role, module: Module) -> bool:
    return lookup(role, module).require_approval


def should_show_only_own_data(role: Role, module: Module) -> bool:
    return lookup(role, module).only_own_data


def should_only_update_status(role: Role, module: Module) -> bool:
    return lookup(role, module).only_update_status


def get_visible_menu_items(role: Role) -> list[Module]:
    """Modules the role can view, in declaration order of Module."""
    return [module for module in Module if can_view(role, module)]


# ========================================
# Role categories
# ========================================

TEACHING_ROLES = frozenset({Role.GV_VIET, Role.GV_NUOCNGOAI, Role.TRO_GIANG})
OFFICE_ROLES = frozenset(
    {
        Role.CSKH_LEAD,
        Role.CSKH_STAFF,
        Role.CM_LEAD,
        Role.CM_STAFF,
        Role.SALE_LEAD,
        Role.SALE_STAFF,
        Role.KETOAN,
    }
)
TEAM_LEAD_ROLES = frozenset({Role.ADMIN, Role.CSKH_LEAD, Role.CM_LEAD, Role.SALE_LEAD})


def is_admin(role: Role) -> bool:
    return role == Role.ADMIN


def is_teacher(role: Role) -> bool:
    return role in TEACHING_ROLES


def is_office_staff(role: Role) -> bool:
    return role in OFFICE_ROLES


def is_team_lead(role: Role) -> bool:
    return role in TEAM_LEAD_ROLES


def can_see_revenue(role: Role) -> bool:
    """Academic lead is a team lead but does not see revenue."""
    return role in (Role.ADMIN, Role.CSKH_LEAD, Role.SALE_LEAD, Role.KETOAN)


def can_see_all_salaries(role: Role) -> bool:
    """Everyone else only sees their own salary data."""
    return role in (Role.ADMIN, Role.KETOAN)


def is_cskh(role: Role) -> bool:
    return role in (Role.CSKH_LEAD, Role.CSKH_STAFF)


def is_cskh_leader(role: Role) -> bool:
    return role == Role.CSKH_LEAD


def is_ketoan(role: Role) -> bool:
    return role == Role.KETOAN
