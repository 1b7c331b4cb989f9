# app/services/rental_services/car_service.py
import logging
from typing import List
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rental_models.car_models import Car
from app.schemas.rental_schemas.car_schemas import CarCreate, CarUpdate
from app.utils.activity_helpers import log_user_activity
from app.utils.check_roles import ensure_owner_or_admin

logger = logging.getLogger(__name__)

RECENT_CARS_LIMIT = 6


# -----------------------
# READ
# -----------------------
async def get_car(db: AsyncSession, car_id: int) -> Car:
    result = await db.execute(
        select(Car)
        .where(Car.id == car_id, Car.is_deleted == False)
        .execution_options(populate_existing=True)
    )
    car = result.scalar_one_or_none()
    if not car:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


async def list_cars(db: AsyncSession, available_only: bool = False) -> List[Car]:
    filters = [Car.is_deleted == False]
    if available_only:
        filters.append(Car.availability == "Available")
    result = await db.execute(select(Car).where(*filters).order_by(Car.id))
    return result.scalars().all()


async def list_cars_by_owner(db: AsyncSession, user_id: int) -> List[Car]:
    result = await db.execute(
        select(Car)
        .where(Car.user_id == user_id, Car.is_deleted == False)
        .order_by(Car.date_added.desc(), Car.id.desc())
    )
    return result.scalars().all()


async def list_recent_cars(db: AsyncSession, limit: int = RECENT_CARS_LIMIT) -> List[Car]:
    result = await db.execute(
        select(Car)
        .where(Car.is_deleted == False)
        .order_by(Car.date_added.desc(), Car.id.desc())
        .limit(limit)
    )
    return result.scalars().all()


async def _ensure_unique_registration(db: AsyncSession, registration_number: str, exclude_id: int | None = None):
    query = select(Car).where(Car.registration_number == registration_number)
    if exclude_id is not None:
        query = query.where(Car.id != exclude_id)
    if (await db.execute(query)).scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Registration number already exists")


# -----------------------
# CREATE
# -----------------------
async def create_car(db: AsyncSession, payload: CarCreate, _user) -> Car:
    await _ensure_unique_registration(db, payload.registration_number)

    car = Car(**payload.model_dump(), user_id=_user.id, booking_count=0)
    db.add(car)
    await db.flush()

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Added car '{car.brand} {car.car_model}' ({car.registration_number})"
    )

    await db.commit()
    logger.info("Car %s created by %s", car.id, _user.username)
    return await get_car(db, car.id)


# -----------------------
# UPDATE
# -----------------------
async def update_car(db: AsyncSession, car_id: int, payload: CarUpdate, _user) -> Car:
    car = await get_car(db, car_id)
    ensure_owner_or_admin(car.user_id, _user)

    update_data = payload.model_dump(exclude_unset=True)
    if update_data.get("registration_number"):
        await _ensure_unique_registration(db, update_data["registration_number"], exclude_id=car.id)

    for key, value in update_data.items():
        setattr(car, key, value)

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Updated car '{car.brand} {car.car_model}' (ID: {car.id})"
    )

    await db.commit()
    return await get_car(db, car.id)


# -----------------------
# SOFT DELETE
# -----------------------
async def delete_car(db: AsyncSession, car_id: int, _user) -> Car:
    car = await get_car(db, car_id)
    ensure_owner_or_admin(car.user_id, _user)

    car.is_deleted = True
    car.availability = "Unavailable"

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Removed car '{car.brand} {car.car_model}' (ID: {car.id})"
    )

    await db.commit()
    return car
