"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from tourmates.api.v1.routes import notifications, tours, users

api_router = APIRouter()

api_router.include_router(tours.router, prefix="/tours", tags=["Tours"])
api_router.include_router(users.router, prefix="/user", tags=["Users"])
api_router.include_router(notifications.router, tags=["Notifications"])
