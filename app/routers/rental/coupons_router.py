# app/routers/rental/coupons_router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.rental_schemas.coupon_schemas import (
    CouponCreate,
    CouponListResponse,
    CouponOut,
    CouponResponse,
    CouponUpdate,
    CouponValidity,
)
from app.services.rental_services.coupon_service import (
    check_coupon,
    create_coupon,
    delete_coupon,
    get_coupon,
    list_coupons,
    update_coupon,
)
from app.utils.get_user import get_current_user
from app.utils.check_roles import require_role

router = APIRouter(prefix="/coupons", tags=["Coupons"])


@router.get("/validate/{code}", response_model=CouponValidity)
async def validate_coupon_route(code: str, db: AsyncSession = Depends(get_db)):
    """
    Check a coupon before asking for a quote.
    Example: /api/coupons/validate/welcome10
    """
    return await check_coupon(db, code)


@router.post("/", response_model=CouponResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin"])
async def create_coupon_route(
    payload: CouponCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    coupon = await create_coupon(db, payload, _user)
    return CouponResponse(message="Coupon created successfully", data=CouponOut.model_validate(coupon))


@router.get("/", response_model=CouponListResponse)
@require_role(["admin", "staff"])
async def list_coupons_route(
    active_only: bool = Query(False, description="Only coupons flagged active"),
    include_deleted: bool = Query(False, description="Include soft-deleted coupons"),
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    coupons = await list_coupons(db, active_only=active_only, include_deleted=include_deleted)
    return CouponListResponse(
        message=f"{len(coupons)} coupons fetched successfully",
        data=[CouponOut.model_validate(c) for c in coupons],
    )


@router.get("/{coupon_id}", response_model=CouponResponse)
@require_role(["admin", "staff"])
async def get_coupon_route(
    coupon_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    coupon = await get_coupon(db, coupon_id)
    return CouponResponse(message="Coupon fetched successfully", data=CouponOut.model_validate(coupon))


@router.put("/{coupon_id}", response_model=CouponResponse)
@require_role(["admin"])
async def update_coupon_route(
    coupon_id: int,
    payload: CouponUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    coupon = await update_coupon(db, coupon_id, payload, _user)
    return CouponResponse(message="Coupon updated successfully", data=CouponOut.model_validate(coupon))


@router.delete("/{coupon_id}", response_model=CouponResponse)
@require_role(["admin"])
async def delete_coupon_route(
    coupon_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    """Soft delete; the code stays reserved."""
    coupon = await delete_coupon(db, coupon_id, _user)
    return CouponResponse(message="Coupon deleted successfully", data=CouponOut.model_validate(coupon))
