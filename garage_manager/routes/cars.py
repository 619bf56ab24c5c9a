from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from garage_manager.db.session import get_db
from garage_manager.schemas.car import CarCreate, CarRead, CarUpdate
from garage_manager.schemas.common import DeleteResponse
from garage_manager.services import car_service

router = APIRouter(prefix="/cars", tags=["Cars"])


@router.get("", response_model=List[CarRead])
def list_cars(
    car_make: str | None = Query(default=None, alias="carMake"),
    garage_id: int | None = Query(default=None, alias="garageId"),
    from_year: int | None = Query(default=None, alias="fromYear"),
    to_year: int | None = Query(default=None, alias="toYear"),
    db: Session = Depends(get_db),
):
    cars = car_service.list_cars(
        db=db,
        make=car_make,
        garage_id=garage_id,
        from_year=from_year,
        to_year=to_year,
    )
    return [CarRead.model_validate(car) for car in cars]


@router.post("", response_model=CarRead, status_code=201)
def create_car(payload: CarCreate, db: Session = Depends(get_db)):
    car = car_service.create_car(db=db, payload=payload)
    return CarRead.model_validate(car)


@router.get("/{car_id}", response_model=CarRead)
def get_car(car_id: int, db: Session = Depends(get_db)):
    car = car_service.get_car(db=db, car_id=car_id)
    return CarRead.model_validate(car)


@router.put("/{car_id}", response_model=CarRead)
def edit_car(car_id: int, payload: CarUpdate, db: Session = Depends(get_db)):
    car = car_service.update_car(db=db, car_id=car_id, payload=payload)
    return CarRead.model_validate(car)


@router.delete("/{car_id}", response_model=DeleteResponse)
def delete_car(car_id: int, db: Session = Depends(get_db)):
    car_service.delete_car(db=db, car_id=car_id)
    return DeleteResponse(id=car_id)
