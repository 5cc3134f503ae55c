"""Dependencies for FastAPI routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.permissions import Module, PermissionAction, has_permission
from app.core.security import decode_access_token
from app.models.staff import Staff
from app.services import staff as staff_service

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_staff(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Staff:
    """Get the staff member identified by the bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    staff_id: str | None = payload.get("sub")
    if staff_id is None:
        raise credentials_exception

    try:
        uuid_id = UUID(staff_id)
    except ValueError:
        raise credentials_exception

    staff = await staff_service.get_staff_by_id(db, uuid_id)
    if staff is None:
        raise credentials_exception

    if not staff.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive staff member",
        )

    return staff


def require_permission(module: Module, action: PermissionAction):
    """Dependency factory to check the caller's role against the permission table."""

    async def permission_checker(
        current_staff: Annotated[Staff, Depends(get_current_staff)],
    ) -> Staff:
        if not has_permission(current_staff.resolved_role, module, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions",
            )
        return current_staff

    return permission_checker


def http_error(exc: NotFoundError) -> HTTPException:
    """Translate a not-found domain error for a route."""
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


# Common dependency aliases
CurrentStaff = Annotated[Staff, Depends(get_current_staff)]
