# app/services/rental_services/price_rule_service.py
from typing import List
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rental_models.price_rule_models import PriceRule
from app.schemas.rental_schemas.price_rule_schemas import (
    RULE_FIELDS,
    PriceRuleCreate,
    PriceRuleUpdate,
    parse_price_rule,
)
from app.services.rental_services.car_service import get_car
from app.utils.activity_helpers import log_user_activity
from app.utils.check_roles import ensure_owner_or_admin


def validated_rule(data: dict):
    """Run data-entry validation on a rule record, mapping failures to 400."""
    try:
        return parse_price_rule(data)
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        raise HTTPException(status_code=400, detail=f"Invalid price rule: {messages}")


def rule_columns(rule) -> dict:
    """Column values for a typed rule; fields the kind doesn't use are cleared."""
    return {
        "rule_type": rule.rule_type,
        "name": rule.name,
        "start_date": getattr(rule, "start_date", None),
        "end_date": getattr(rule, "end_date", None),
        "min_days": getattr(rule, "min_days", None),
        "adjustment_type": rule.adjustment_type,
        "adjustment_value": rule.adjustment_value,
    }


async def get_price_rule(db: AsyncSession, rule_id: int) -> PriceRule:
    rule = await db.get(PriceRule, rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Price rule not found")
    return rule


async def list_price_rules(db: AsyncSession, car_id: int) -> List[PriceRule]:
    await get_car(db, car_id)
    result = await db.execute(
        select(PriceRule)
        .where(PriceRule.car_id == car_id)
        .order_by(PriceRule.position, PriceRule.id)
    )
    return result.scalars().all()


async def create_price_rule(db: AsyncSession, payload: PriceRuleCreate, _user) -> PriceRule:
    car = await get_car(db, payload.car_id)
    ensure_owner_or_admin(car.user_id, _user)

    typed = validated_rule(payload.model_dump())
    rule = PriceRule(
        car_id=car.id,
        position=payload.position,
        created_by=_user.id,
        **rule_columns(typed),
    )
    db.add(rule)
    await db.flush()

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Added {rule.rule_type} rule '{rule.name}' to car {car.id}"
    )

    await db.commit()
    await db.refresh(rule)
    return rule


async def update_price_rule(db: AsyncSession, rule_id: int, payload: PriceRuleUpdate, _user) -> PriceRule:
    rule = await get_price_rule(db, rule_id)
    car = await get_car(db, rule.car_id)
    ensure_owner_or_admin(car.user_id, _user)

    update_data = payload.model_dump(exclude_unset=True)
    position = update_data.pop("position", None)

    merged = {field: getattr(rule, field) for field in RULE_FIELDS}
    merged.update(update_data)
    typed = validated_rule(merged)

    for key, value in rule_columns(typed).items():
        setattr(rule, key, value)
    if position is not None:
        rule.position = position

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Updated {rule.rule_type} rule '{rule.name}' (ID: {rule.id})"
    )

    await db.commit()
    await db.refresh(rule)
    return rule


async def delete_price_rule(db: AsyncSession, rule_id: int, _user) -> None:
    rule = await get_price_rule(db, rule_id)
    car = await get_car(db, rule.car_id)
    ensure_owner_or_admin(car.user_id, _user)

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Deleted {rule.rule_type} rule '{rule.name}' from car {car.id}"
    )
    await db.delete(rule)
    await db.commit()
