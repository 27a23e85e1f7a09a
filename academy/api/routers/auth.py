# academy/api/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.security import verify_password, create_token
from academy.schemas.auth import LoginIn, TokenOut, UserOut
from academy.models.user import User
from academy.api.deps.auth import get_current_user, user_roles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _user_out(user: User) -> UserOut:
    roles = user_roles(user)
    return UserOut(id=user.id, username=user.username, name=user.name, roles=roles,
                   activeRole=roles[0] if roles else "")


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    username = payload.username.strip().lower()
    user = db.execute(
        select(User).where(func.lower(User.username) == username)
    ).scalar_one_or_none()

    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %r", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_token(sub=user.id, roles=user_roles(user), name=user.name)
    return TokenOut(access_token=token, user=_user_out(user))


@router.get("/me", response_model=UserOut)
def me(ctx=Depends(get_current_user)):
    return _user_out(ctx["user"])
