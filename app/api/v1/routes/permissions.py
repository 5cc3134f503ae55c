"""Permission API routes."""

from fastapi import APIRouter, Depends

from app.core.deps import CurrentStaff, require_permission
from app.core.permissions import Module, PermissionAction, Role
from app.schemas.permission import PermissionSummary

router = APIRouter(prefix="/permissions", tags=["Permissions"])


@router.get("/me", response_model=PermissionSummary)
async def get_my_permissions(current_staff: CurrentStaff) -> PermissionSummary:
    """Resolved role, visible menu, capability map and role flags of the caller."""
    return PermissionSummary.for_role(current_staff.resolved_role)


@router.get(
    "/roles/{role}",
    response_model=PermissionSummary,
    dependencies=[Depends(require_permission(Module.SETTINGS, PermissionAction.VIEW))],
)
async def get_role_permissions(role: Role) -> PermissionSummary:
    """Capability map of any role. Requires access to settings."""
    return PermissionSummary.for_role(role)
