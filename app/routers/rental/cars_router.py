# app/routers/rental/cars_router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.rental_schemas.car_schemas import CarCreate, CarUpdate, CarOut, CarResponse, CarListResponse
from app.services.rental_services.car_service import (
    create_car,
    get_car,
    list_cars,
    list_cars_by_owner,
    list_recent_cars,
    update_car,
    delete_car,
)
from app.utils.get_user import get_current_user
from app.utils.check_roles import require_role

router = APIRouter(prefix="/cars", tags=["Cars"])


# --------------------------
# LIST CARS
# --------------------------
@router.get("/", response_model=CarListResponse)
async def list_cars_route(
    available_only: bool = Query(False, description="Only cars marked Available"),
    db: AsyncSession = Depends(get_db),
):
    cars = await list_cars(db, available_only=available_only)
    return CarListResponse(message=f"{len(cars)} cars fetched successfully", data=[CarOut.model_validate(c) for c in cars])


@router.get("/mine", response_model=CarListResponse)
async def list_my_cars_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    cars = await list_cars_by_owner(db, _user.id)
    return CarListResponse(message=f"{len(cars)} cars fetched successfully", data=[CarOut.model_validate(c) for c in cars])


@router.get("/recently-added", response_model=CarListResponse)
async def list_recent_cars_route(db: AsyncSession = Depends(get_db)):
    cars = await list_recent_cars(db)
    return CarListResponse(message="Recently added cars fetched successfully", data=[CarOut.model_validate(c) for c in cars])


@router.get("/{car_id}", response_model=CarResponse)
async def get_car_route(car_id: int, db: AsyncSession = Depends(get_db)):
    car = await get_car(db, car_id)
    return CarResponse(message="Car fetched successfully", data=CarOut.model_validate(car))


# --------------------------
# CREATE / UPDATE / DELETE
# --------------------------
@router.post("/", response_model=CarResponse, status_code=status.HTTP_201_CREATED)
@require_role(["admin", "staff"])
async def create_car_route(
    payload: CarCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    car = await create_car(db, payload, _user)
    return CarResponse(message="Car created successfully", data=CarOut.model_validate(car))


@router.put("/{car_id}", response_model=CarResponse)
@require_role(["admin", "staff"])
async def update_car_route(
    car_id: int,
    payload: CarUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    car = await update_car(db, car_id, payload, _user)
    return CarResponse(message="Car updated successfully", data=CarOut.model_validate(car))


@router.delete("/{car_id}", response_model=CarResponse)
@require_role(["admin", "staff"])
async def delete_car_route(
    car_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    """Soft delete; bookings keep pointing at the car for history."""
    await delete_car(db, car_id, _user)
    return CarResponse(message="Car deleted successfully", data=None)
