"""Maintenance routes, including the monthly requests report."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from garage_manager.db.session import get_db
from garage_manager.routes.params import parse_id, parse_month
from garage_manager.schemas.common import DeleteResponse
from garage_manager.schemas.maintenance import (
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceUpdate,
)
from garage_manager.schemas.report import MonthlyRequestsItem
from garage_manager.services import maintenance_service
from garage_manager.services.report_service import get_monthly_requests_report

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])


@router.get("/monthlyRequestsReport", response_model=List[MonthlyRequestsItem])
def monthly_requests_report(
    garage_id: str | None = Query(default=None, alias="garageId"),
    start_month: str | None = Query(
        default=None,
        alias="startMonth",
        description="Month in YYYY-MM format",
    ),
    end_month: str | None = Query(
        default=None,
        alias="endMonth",
        description="Month in YYYY-MM format",
    ),
    db: Session = Depends(get_db),
):
    return get_monthly_requests_report(
        db=db,
        garage_id=parse_id("garageId", garage_id),
        start_month=parse_month("startMonth", start_month),
        end_month=parse_month("endMonth", end_month),
    )


@router.get("", response_model=List[MaintenanceRead])
def list_maintenance(
    car_id: int | None = Query(default=None, alias="carId"),
    garage_id: int | None = Query(default=None, alias="garageId"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
):
    records = maintenance_service.list_maintenance(
        db=db,
        car_id=car_id,
        garage_id=garage_id,
        start_date=start_date,
        end_date=end_date,
    )
    return [MaintenanceRead.model_validate(record) for record in records]


@router.post("", response_model=MaintenanceRead, status_code=201)
def create_maintenance(payload: MaintenanceCreate, db: Session = Depends(get_db)):
    record = maintenance_service.create_maintenance(db=db, payload=payload)
    return MaintenanceRead.model_validate(record)


@router.get("/{maintenance_id}", response_model=MaintenanceRead)
def get_maintenance(maintenance_id: int, db: Session = Depends(get_db)):
    record = maintenance_service.get_maintenance(db=db, maintenance_id=maintenance_id)
    return MaintenanceRead.model_validate(record)


@router.put("/{maintenance_id}", response_model=MaintenanceRead)
def edit_maintenance(
    maintenance_id: int,
    payload: MaintenanceUpdate,
    db: Session = Depends(get_db),
):
    record = maintenance_service.update_maintenance(
        db=db,
        maintenance_id=maintenance_id,
        payload=payload,
    )
    return MaintenanceRead.model_validate(record)


@router.delete("/{maintenance_id}", response_model=DeleteResponse)
def delete_maintenance(maintenance_id: int, db: Session = Depends(get_db)):
    maintenance_service.delete_maintenance(db=db, maintenance_id=maintenance_id)
    return DeleteResponse(id=maintenance_id)
