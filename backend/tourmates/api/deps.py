"""
Shared route dependencies.
"""

from typing import Optional

from fastapi import Header, HTTPException, Request

from tourmates.features.notifications import NearbyTourDispatcher


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Acting user id.

    Sessions are handled by the auth proxy in front of the API, which
    forwards the authenticated id in X-User-Id.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id


def get_nearby_dispatcher(request: Request) -> NearbyTourDispatcher:
    """Dispatcher created in the app lifespan."""
    dispatcher = getattr(request.app.state, "nearby_dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Notification dispatcher not ready")
    return dispatcher
