from typing import Optional

from fastapi import Header

from app.database import get_db
from app.errors import UnauthorizedError

__all__ = ["get_db", "get_current_user"]


def get_current_user(x_user_id: Optional[str] = Header(None)) -> str:
    """Identify the requesting user from the X-User-Id header set by the auth proxy"""
    user = (x_user_id or "").strip()
    if not user:
        raise UnauthorizedError("Missing X-User-Id header")
    return user
