# app/services/auth_services/user_service.py
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException
from app.models.user_models import User
from app.core.security import hash_password
from app.schemas.user_schemas import UserCreate, UserUpdate
from app.utils.activity_helpers import log_user_activity

logger = logging.getLogger(__name__)


async def _ensure_username_free(db: AsyncSession, username: str, exclude_id: Optional[int] = None) -> None:
    query = select(User).where(User.username == username)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    if (await db.execute(query)).scalars().first():
        raise HTTPException(status_code=400, detail="Username already exists")


async def create_user(db: AsyncSession, user_data: UserCreate, current_user=None) -> User:
    """
    Create an account. Self-registration passes no current_user and always yields a customer.
    """
    await _ensure_username_free(db, user_data.username)

    new_user = User(
        username=user_data.username,
        password_hash=hash_password(user_data.password),
        role=user_data.role if current_user else "customer",
    )
    db.add(new_user)
    await db.flush()

    if current_user:
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Created {new_user.role} account {new_user.username} (ID: {new_user.id})"
        )
    else:
        await log_user_activity(db, user_id=new_user.id, username=new_user.username, message="Registered a customer account")

    await db.commit()
    await db.refresh(new_user)
    logger.info("User %s registered as %s", new_user.username, new_user.role)
    return new_user


async def list_users(db: AsyncSession, role: Optional[str] = None, include_inactive: bool = False) -> List[User]:
    filters = []
    if role:
        filters.append(User.role == role)
    if not include_inactive:
        filters.append(User.is_active == True)
    result = await db.execute(select(User).where(*filters).order_by(User.id))
    return result.scalars().all()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def update_user(db: AsyncSession, user_id: int, user_data: UserUpdate, current_user) -> User:
    target_user = await get_user_by_id(db, user_id)
    changes = []

    if user_data.username and user_data.username != target_user.username:
        await _ensure_username_free(db, user_data.username, exclude_id=user_id)
        changes.append(f"username to {user_data.username}")
        target_user.username = user_data.username

    if user_data.password:
        target_user.password_hash = hash_password(user_data.password)
        # Outstanding access tokens stop working
        target_user.token_version += 1
        changes.append("password")

    if user_data.role and user_data.role != target_user.role:
        changes.append(f"role to {user_data.role}")
        target_user.role = user_data.role

    if changes:
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Updated account {target_user.username}: {', '.join(changes)}"
        )

    await db.commit()
    await db.refresh(target_user)
    return target_user


async def deactivate_user(db: AsyncSession, user_id: int, current_user) -> User:
    target_user = await get_user_by_id(db, user_id)
    if target_user.id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot deactivate your own account")

    target_user.is_active = False
    target_user.token_version += 1

    await log_user_activity(
        db,
        user_id=current_user.id,
        username=current_user.username,
        message=f"Deactivated {target_user.role} account {target_user.username}"
    )
    await db.commit()
    await db.refresh(target_user)
    return target_user
