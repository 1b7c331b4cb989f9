# app/schemas/rental_schemas/coupon_schemas.py
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Literal, Optional
from datetime import datetime

from app.schemas.rental_schemas.money import PositiveDecimal


def canonical_code(code: str) -> str:
    return code.strip().upper()


class CouponBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    discount_type: Literal["percentage", "flat"]
    discount_value: PositiveDecimal
    expires_at: datetime
    active: bool = True
    usage_limit: Optional[int] = Field(None, ge=1)
    min_days: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        value = canonical_code(value)
        if not value:
            raise ValueError("Coupon code is required")
        return value

    @model_validator(mode="after")
    def check_percentage(self):
        if self.discount_type == "percentage" and self.discount_value > 100:
            raise ValueError("Percentage must be between 0 and 100")
        return self


class CouponCreate(CouponBase):
    pass


class CouponUpdate(BaseModel):
    discount_type: Optional[Literal["percentage", "flat"]] = None
    discount_value: Optional[PositiveDecimal] = None
    expires_at: Optional[datetime] = None
    active: Optional[bool] = None
    usage_limit: Optional[int] = Field(None, ge=1)
    min_days: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None


class CouponTerms(CouponBase):
    """A coupon as the pricing core sees it, including its running usage count."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    usage_count: int = Field(0, ge=0)


class CouponOut(CouponTerms):
    id: int
    created_at: Optional[datetime] = None


class CouponValidity(BaseModel):
    valid: bool
    reason: Optional[str] = None


class CouponResponse(BaseModel):
    message: str
    data: Optional[CouponOut] = None


class CouponListResponse(BaseModel):
    message: str
    data: List[CouponOut] = []
