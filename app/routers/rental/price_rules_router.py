# app/routers/rental/price_rules_router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.rental_schemas.price_rule_schemas import (
    DefaultPriceRulesResponse,
    PriceRuleCreate,
    PriceRuleListResponse,
    PriceRuleOut,
    PriceRuleResponse,
    PriceRuleUpdate,
)
from app.services.rental_services.booking_service import quote_generator
from app.services.rental_services.price_rule_service import (
    create_price_rule,
    delete_price_rule,
    list_price_rules,
    update_price_rule,
)
from app.utils.get_user import get_current_user
from app.utils.check_roles import require_role

router = APIRouter(prefix="/price-rules", tags=["Price Rules"])


@router.get("/defaults", response_model=DefaultPriceRulesResponse)
async def default_price_rules_route():
    """Rules applied to cars that have no custom rules of their own."""
    return DefaultPriceRulesResponse(
        message="Default price rules fetched successfully",
        data=list(quote_generator.default_rules),
    )


@router.get("/", response_model=PriceRuleListResponse)
async def list_price_rules_route(
    car_id: int = Query(..., description="Car whose custom rules to list"),
    db: AsyncSession = Depends(get_db),
):
    rules = await list_price_rules(db, car_id)
    return PriceRuleListResponse(message=f"{len(rules)} price rules fetched successfully", data=[PriceRuleOut.model_validate(r) for r in rules])


@router.post("/", response_model=PriceRuleResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin", "staff"])
async def create_price_rule_route(
    payload: PriceRuleCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    rule = await create_price_rule(db, payload, _user)
    return PriceRuleResponse(message="Price rule created successfully", data=PriceRuleOut.model_validate(rule))


@router.put("/{rule_id}", response_model=PriceRuleResponse)
@require_role(["admin", "staff"])
async def update_price_rule_route(
    rule_id: int,
    payload: PriceRuleUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    rule = await update_price_rule(db, rule_id, payload, _user)
    return PriceRuleResponse(message="Price rule updated successfully", data=PriceRuleOut.model_validate(rule))


@router.delete("/{rule_id}", response_model=PriceRuleResponse)
@require_role(["admin", "staff"])
async def delete_price_rule_route(
    rule_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    await delete_price_rule(db, rule_id, _user)
    return PriceRuleResponse(message="Price rule deleted successfully", data=None)
