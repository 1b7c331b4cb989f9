# app/schemas/rental_schemas/price_rule_schemas.py
"""
Price rules are a tagged union over three kinds:

- season:  adjusts every night inside [start_date, end_date]
- weekend: adjusts Friday, Saturday and Sunday nights
- length:  discounts the whole rental once it reaches min_days nights

Each rule carries exactly one adjustment, either a percentage or a flat amount.
"""
from datetime import date
from decimal import Decimal
from typing import Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from typing_extensions import Annotated

from app.schemas.rental_schemas.money import Money

AdjustmentType = Literal["percentage", "flat"]


class PriceRuleBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=100)
    adjustment_type: AdjustmentType
    adjustment_value: Money

    @model_validator(mode="after")
    def check_adjustment(self):
        if self.adjustment_value == 0:
            raise ValueError("Price rule adjustment must be non-zero")
        return self


class SeasonRule(PriceRuleBase):
    rule_type: Literal["season"] = "season"
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("Season end date must not be before its start date")
        return self


class WeekendRule(PriceRuleBase):
    rule_type: Literal["weekend"] = "weekend"
    name: str = Field("Weekend Surcharge", min_length=1, max_length=100)


class LengthRule(PriceRuleBase):
    rule_type: Literal["length"] = "length"
    min_days: int = Field(..., ge=1)

    @model_validator(mode="after")
    def check_flat_discount(self):
        # Flat length discounts are subtracted as given, so they must be positive
        if self.adjustment_type == "flat" and self.adjustment_value < 0:
            raise ValueError("Flat length discount must be positive")
        return self


TypedPriceRule = Annotated[
    Union[SeasonRule, WeekendRule, LengthRule],
    Field(discriminator="rule_type"),
]

price_rule_adapter = TypeAdapter(TypedPriceRule)

RULE_FIELDS = ("rule_type", "name", "start_date", "end_date", "min_days", "adjustment_type", "adjustment_value")


def parse_price_rule(data: Mapping[str, Any] | Any) -> Union[SeasonRule, WeekendRule, LengthRule]:
    """
    Build a typed price rule from a loose record (dict, request payload or ORM row).
    Fields that don't belong to the rule's kind are ignored; raises pydantic.ValidationError.
    """
    if not isinstance(data, Mapping):
        data = {field: getattr(data, field, None) for field in RULE_FIELDS}
    rule_type = data.get("rule_type")
    allowed = {"rule_type", "name", "adjustment_type", "adjustment_value"}
    if rule_type == "season":
        allowed |= {"start_date", "end_date"}
    elif rule_type == "length":
        allowed |= {"min_days"}
    payload = {k: v for k, v in data.items() if k in allowed and v is not None}
    payload.setdefault("rule_type", rule_type)
    return price_rule_adapter.validate_python(payload)


# --------------------------
# API Schemas
# --------------------------
class PriceRuleCreate(BaseModel):
    car_id: int
    rule_type: Literal["season", "weekend", "length"]
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_days: Optional[int] = None
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    position: int = 0


class PriceRuleUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_days: Optional[int] = None
    adjustment_type: Optional[AdjustmentType] = None
    adjustment_value: Optional[Decimal] = None
    position: Optional[int] = None


class PriceRuleOut(BaseModel):
    id: int
    car_id: int
    rule_type: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_days: Optional[int] = None
    adjustment_type: str
    adjustment_value: Money
    position: int

    model_config = ConfigDict(from_attributes=True)


class PriceRuleListResponse(BaseModel):
    message: str
    data: List[PriceRuleOut] = []


class PriceRuleResponse(BaseModel):
    message: str
    data: Optional[PriceRuleOut] = None


class DefaultPriceRulesResponse(BaseModel):
    message: str
    data: List[TypedPriceRule] = []
