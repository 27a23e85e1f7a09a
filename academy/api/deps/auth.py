# academy/api/deps/auth.py
from typing import Dict, Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.security import decode_token
from academy.models.user import User

security = HTTPBearer(auto_error=False)

# Roles allowed to look at every teacher's schedule
OVERSIGHT_ROLES = {"admin", "upper-management", "high-level-dashboard"}


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """
    Decode the bearer token and load the user it names.
    Returns: {"user": User, "roles": list[str], "claims": dict}
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = decode_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token missing user ID")

    user = db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return {"user": user, "roles": user_roles(user), "claims": claims}


def user_roles(user: User) -> list[str]:
    return [r.strip() for r in (user.roles or "").split(",") if r.strip()]


def require_roles(*allowed: str):
    """Dependency factory: the caller must hold at least one of the roles"""
    def checker(ctx: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if not set(ctx["roles"]) & set(allowed):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return ctx
    return checker


def ensure_teacher_scope(ctx: Dict[str, Any], teacher_name: str) -> None:
    """A plain teacher may only act on their own schedule"""
    if set(ctx["roles"]) & OVERSIGHT_ROLES:
        return
    if ctx["user"].name != teacher_name:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Teachers may only access their own schedule")
