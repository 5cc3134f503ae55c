"""API v1 router aggregating all route modules."""

from fastapi import APIRouter

from app.api.v1.routes import leave_balances, leave_requests, permissions, staff

api_router = APIRouter()

api_router.include_router(permissions.router)
api_router.include_router(staff.router)
api_router.include_router(leave_requests.router)
api_router.include_router(leave_balances.router)
