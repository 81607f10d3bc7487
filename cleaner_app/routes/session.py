"""
Session Routes
"""

from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request

router = APIRouter(prefix="/session", tags=["session"])


@router.delete("")
async def logout(
    request: Request,
    user_access_token: Optional[str] = Header(default=None, alias="user-access-token"),
):
    """Clear the caller's cached tasks and calendar state"""
    if not user_access_token:
        raise HTTPException(status_code=401, detail="Missing user-access-token header")

    closed = request.app.state.sessions.close(user_access_token)
    return {"message": "Logged out" if closed else "No active session"}
