# app/utils/get_user.py
from fastapi import Request, Depends, HTTPException, Header
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.models.user_models import User
from app.core.db import get_db
from app.core.security import decode_token


def _bearer_token(token: str | None, authorization: str | None) -> str:
    # Clients send either a bare `token` header or `Authorization: Bearer ...`
    if token:
        return token
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):]
    raise HTTPException(status_code=401, detail="Missing access token")


async def get_current_user(
    request: Request,
    token: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> User:
    try:
        payload = decode_token(_bearer_token(token, authorization))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    username = payload.get("sub")
    token_version = payload.get("token_version")
    if payload.get("type") != "access" or not username or token_version is None:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    user = (await db.execute(select(User).where(User.username == username))).scalars().first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if user.token_version != token_version:
        raise HTTPException(status_code=401, detail="Token invalidated. Please log in again.")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is inactive.")

    # The activity middleware reads the user from here
    request.state.user = user
    return user
