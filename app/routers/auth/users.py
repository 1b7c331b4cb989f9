# app/routers/auth/users.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_db
from app.schemas.user_schemas import (
    UserCreate, UserUpdate, UserOut, UserResponse, UsersListResponse, MessageResponse, UserRole
)
from app.utils.get_user import get_current_user
from app.utils.check_roles import require_role
from app.services.auth_services.user_service import (
    create_user, list_users, get_user_by_id, update_user, deactivate_user
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin"])
async def create_user_route(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    """Admins create staff, admin or customer accounts."""
    new_user = await create_user(db, user_data, _user)
    return UserResponse(msg=f"{new_user.role.capitalize()} '{new_user.username}' created.", data=UserOut.model_validate(new_user))


# Staff can look customers up when handling bookings at the desk
@router.get("/", response_model=UsersListResponse)
@require_role(["admin", "staff"])
async def list_users_route(
    role: Optional[UserRole] = Query(None, description="Only users with this role"),
    include_inactive: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    users = await list_users(db, role=role, include_inactive=include_inactive)
    return UsersListResponse(msg=f"{len(users)} users found.", data=[UserOut.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=UserResponse)
@require_role(["admin", "staff"])
async def get_user_route(user_id: int, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    target_user = await get_user_by_id(db, user_id)
    return UserResponse(msg="User found.", data=UserOut.model_validate(target_user))


@router.put("/{user_id}", response_model=UserResponse)
@require_role(["admin"])
async def update_user_route(
    user_id: int,
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    updated_user = await update_user(db, user_id, user_data, _user)
    return UserResponse(msg=f"User '{updated_user.username}' updated.", data=UserOut.model_validate(updated_user))


@router.delete("/{user_id}", response_model=MessageResponse)
@require_role(["admin"])
async def deactivate_user_route(user_id: int, db: AsyncSession = Depends(get_db), _user=Depends(get_current_user)):
    """Accounts are deactivated, never removed, so their bookings keep an owner."""
    target_user = await deactivate_user(db, user_id, _user)
    return MessageResponse(msg=f"User '{target_user.username}' deactivated.")
