# app/services/rental_services/coupon_service.py
import logging
from typing import List, Optional, Tuple
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rental_models.coupon_models import Coupon
from app.schemas.rental_schemas.coupon_schemas import (
    CouponCreate,
    CouponTerms,
    CouponUpdate,
    CouponValidity,
    canonical_code,
)
from app.services.pricing_services.coupon_validator import is_coupon_valid
from app.utils.activity_helpers import log_user_activity

logger = logging.getLogger(__name__)

UNKNOWN_COUPON = "Invalid coupon code"


# -----------------------
# LOOKUP
# -----------------------
async def get_coupon_by_code(db: AsyncSession, code: str) -> Optional[Coupon]:
    result = await db.execute(
        select(Coupon).where(Coupon.code == canonical_code(code), Coupon.is_deleted == False)
    )
    return result.scalar_one_or_none()


async def resolve_coupon(db: AsyncSession, code: Optional[str]) -> Tuple[Optional[Coupon], Optional[str]]:
    """
    Find a usable coupon for a quote or booking.
    Returns (coupon, None) when it can be applied, or (None, reason) when it can't.
    """
    if not code or not code.strip():
        return None, None

    coupon = await get_coupon_by_code(db, code)
    if not coupon:
        logger.debug("Unknown coupon code %r", code)
        return None, UNKNOWN_COUPON

    validity = is_coupon_valid(coupon)
    if not validity.valid:
        logger.debug("Coupon %s rejected: %s", coupon.code, validity.reason)
        return None, validity.reason

    return coupon, None


async def check_coupon(db: AsyncSession, code: str) -> CouponValidity:
    coupon = await get_coupon_by_code(db, code)
    if not coupon:
        return CouponValidity(valid=False, reason=UNKNOWN_COUPON)
    return is_coupon_valid(coupon)


# -----------------------
# CREATE
# -----------------------
async def create_coupon(db: AsyncSession, payload: CouponCreate, _user) -> Coupon:
    existing = await db.execute(select(Coupon).where(Coupon.code == payload.code))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Coupon code already exists")

    coupon = Coupon(**payload.model_dump(), usage_count=0)
    db.add(coupon)
    await db.flush()

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Created coupon '{coupon.code}'"
    )

    await db.commit()
    await db.refresh(coupon)
    return coupon


# -----------------------
# READ
# -----------------------
async def list_coupons(db: AsyncSession, active_only: bool = False, include_deleted: bool = False) -> List[Coupon]:
    filters = []
    if not include_deleted:
        filters.append(Coupon.is_deleted == False)
    if active_only:
        filters.append(Coupon.active == True)
    result = await db.execute(select(Coupon).where(*filters).order_by(Coupon.code))
    return result.scalars().all()


async def get_coupon(db: AsyncSession, coupon_id: int) -> Coupon:
    result = await db.execute(
        select(Coupon).where(Coupon.id == coupon_id, Coupon.is_deleted == False)
    )
    coupon = result.scalar_one_or_none()
    if not coupon:
        raise HTTPException(status_code=404, detail="Coupon not found")
    return coupon


# -----------------------
# UPDATE
# -----------------------
async def update_coupon(db: AsyncSession, coupon_id: int, payload: CouponUpdate, _user) -> Coupon:
    coupon = await get_coupon(db, coupon_id)
    update_data = payload.model_dump(exclude_unset=True)

    # Re-validate the merged record so type/value combinations stay consistent
    merged = CouponTerms.model_validate(coupon).model_dump()
    merged.update(update_data)
    try:
        CouponTerms.model_validate(merged)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid coupon: {exc}")

    for key, value in update_data.items():
        setattr(coupon, key, value)

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Updated coupon '{coupon.code}' (ID: {coupon.id})"
    )

    await db.commit()
    await db.refresh(coupon)
    return coupon


# -----------------------
# SOFT DELETE
# -----------------------
async def delete_coupon(db: AsyncSession, coupon_id: int, _user) -> Coupon:
    coupon = await get_coupon(db, coupon_id)
    coupon.is_deleted = True
    coupon.active = False

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Soft-deleted coupon '{coupon.code}' (ID: {coupon.id})"
    )

    await db.commit()
    await db.refresh(coupon)
    return coupon


def record_coupon_use(coupon: Coupon) -> None:
    """Count one redemption. Caller commits."""
    coupon.usage_count = (coupon.usage_count or 0) + 1
