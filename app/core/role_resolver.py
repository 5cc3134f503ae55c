"""Map staff job titles and role codes to a Role."""

import logging
from typing import Protocol

from app.core.permissions import Role

logger = logging.getLogger(__name__)

# Unrecognized identities never inherit elevated capability
DEFAULT_ROLE = Role.TRO_GIANG

# Known job titles, matched exactly (case and diacritics included)
POSITION_TO_ROLE: dict[str, Role] = {
    # Management
    "Quản lý (Admin)": Role.ADMIN,
    "Quản trị viên": Role.ADMIN,
    "Quản lý": Role.ADMIN,
    "Admin": Role.ADMIN,
    "admin": Role.ADMIN,
    # Training - Vietnamese teacher
    "Giáo Viên Việt": Role.GV_VIET,
    "Giáo viên Việt": Role.GV_VIET,
    "GV Việt": Role.GV_VIET,
    "Giáo viên": Role.GV_VIET,
    # Training - foreign teacher
    "Giáo Viên Nước Ngoài": Role.GV_NUOCNGOAI,
    "Giáo viên nước ngoài": Role.GV_NUOCNGOAI,
    "GV Ngoại": Role.GV_NUOCNGOAI,
    "GV NN": Role.GV_NUOCNGOAI,
    "GVNN": Role.GV_NUOCNGOAI,
    # Training - teaching assistant
    "Trợ Giảng": Role.TRO_GIANG,
    "Trợ giảng": Role.TRO_GIANG,
    "TG": Role.TRO_GIANG,
    # Office - customer care
    "Trưởng Nhóm CSKH": Role.CSKH_LEAD,
    "NV CSKH": Role.CSKH_STAFF,
    "Tư vấn viên": Role.CSKH_STAFF,
    "Lễ tân": Role.CSKH_STAFF,
    "CSKH": Role.CSKH_STAFF,
    "Nhân viên": Role.CSKH_STAFF,
    # Office - academic
    "Trưởng Nhóm CM": Role.CM_LEAD,
    "Trưởng Nhóm Học Thuật": Role.CM_LEAD,
    "Trưởng Nhóm Chuyên Môn": Role.CM_LEAD,
    "CM Leader": Role.CM_LEAD,
    "NV CM": Role.CM_STAFF,
    "NV Chuyên Môn": Role.CM_STAFF,
    # Office - accounting
    "Kế toán": Role.KETOAN,
    "Kế Toán": Role.KETOAN,
    # Office - sales
    "Trưởng Nhóm Sale": Role.SALE_LEAD,
    "NV Sale": Role.SALE_STAFF,
    "Sale": Role.SALE_STAFF,
}

_ROLE_CODES = {role.value: role for role in Role}


class StaffLike(Protocol):
    id: object
    position: str | None
    role: str | None


def role_from_code(role_code: str | None) -> Role | None:
    """Return the Role for an explicit role code, or None if unrecognized."""
    if not role_code:
        return None
    return _ROLE_CODES.get(role_code)


def resolve_role(position: str | None, role_code: str | None = None) -> Role:
    """Resolve a Role from an explicit role code and/or a job title.

    A recognized role code wins over the title. Anything that cannot be
    resolved falls back to DEFAULT_ROLE. Never raises.
    """
    role = role_from_code(role_code)
    if role is not None:
        return role

    if position:
        role = POSITION_TO_ROLE.get(position)
        if role is not None:
            return role

    return DEFAULT_ROLE


def resolve_staff_role(staff: StaffLike | None) -> Role:
    """Resolve the Role of a staff record (None while the record is unavailable)."""
    if staff is None:
        return DEFAULT_ROLE

    role = resolve_role(staff.position, staff.role)
    if role is DEFAULT_ROLE and role_from_code(staff.role) is None:
        if not staff.position:
            logger.warning("Staff %s has no position, restricting access", staff.id)
        elif staff.position not in POSITION_TO_ROLE:
            logger.warning(
                "Staff %s has unknown position %r, restricting access",
                staff.id,
                staff.position,
            )
    return role
