"""Garage routes, including the daily availability report."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from garage_manager.db.session import get_db
from garage_manager.routes.params import parse_date, parse_id
from garage_manager.schemas.common import DeleteResponse
from garage_manager.schemas.garage import GarageCreate, GarageRead, GarageUpdate
from garage_manager.schemas.report import DailyAvailabilityItem
from garage_manager.services import garage_service
from garage_manager.services.report_service import get_daily_availability_report

router = APIRouter(prefix="/garages", tags=["Garages"])


# Declared before "/{garage_id}" so the literal path wins.
@router.get("/dailyAvailabilityReport", response_model=List[DailyAvailabilityItem])
def daily_availability_report(
    garage_id: str | None = Query(default=None, alias="garageId"),
    start_date: str | None = Query(
        default=None,
        alias="startDate",
        description="Date in YYYY-MM-DD format",
    ),
    end_date: str | None = Query(
        default=None,
        alias="endDate",
        description="Date in YYYY-MM-DD format",
    ),
    db: Session = Depends(get_db),
):
    return get_daily_availability_report(
        db=db,
        garage_id=parse_id("garageId", garage_id),
        start_date=parse_date("startDate", start_date),
        end_date=parse_date("endDate", end_date),
    )


@router.get("", response_model=List[GarageRead])
def list_garages(
    city: str | None = None,
    db: Session = Depends(get_db),
):
    garages = garage_service.list_garages(db=db, city=city)
    return [GarageRead.model_validate(garage) for garage in garages]


@router.post("", response_model=GarageRead, status_code=201)
def create_garage(payload: GarageCreate, db: Session = Depends(get_db)):
    garage = garage_service.create_garage(db=db, payload=payload)
    return GarageRead.model_validate(garage)


@router.get("/{garage_id}", response_model=GarageRead)
def get_garage(garage_id: int, db: Session = Depends(get_db)):
    garage = garage_service.get_garage(db=db, garage_id=garage_id)
    return GarageRead.model_validate(garage)


@router.put("/{garage_id}", response_model=GarageRead)
def edit_garage(
    garage_id: int,
    payload: GarageUpdate,
    db: Session = Depends(get_db),
):
    garage = garage_service.update_garage(db=db, garage_id=garage_id, payload=payload)
    return GarageRead.model_validate(garage)


@router.delete("/{garage_id}", response_model=DeleteResponse)
def delete_garage(garage_id: int, db: Session = Depends(get_db)):
    garage_service.delete_garage(db=db, garage_id=garage_id)
    return DeleteResponse(id=garage_id)
