"""Business logic for maintenance records."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from garage_manager.core.domain_exceptions import (
    ConflictError,
    NotFoundError,
    UnavailableError,
)
from garage_manager.db.models import Maintenance
from garage_manager.db.session import transaction
from garage_manager.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
from garage_manager.services.car_service import get_car_or_raise
from garage_manager.services.garage_service import get_garage_or_raise

logger = logging.getLogger(__name__)


def get_maintenance_or_raise(db: Session, maintenance_id: int) -> Maintenance:
    maintenance = db.scalar(
        select(Maintenance)
        .options(joinedload(Maintenance.car), joinedload(Maintenance.garage))
        .where(Maintenance.id == maintenance_id)
    )
    if maintenance is None:
        raise NotFoundError(
            "Maintenance not found",
            f"No maintenance found with id {maintenance_id}",
        )
    return maintenance


def list_maintenance(
    db: Session,
    car_id: int | None = None,
    garage_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[Maintenance]:
    query = (
        select(Maintenance)
        .options(joinedload(Maintenance.car), joinedload(Maintenance.garage))
        .order_by(Maintenance.scheduled_date.asc(), Maintenance.id.asc())
    )

    if car_id is not None:
        query = query.where(Maintenance.car_id == car_id)
    if garage_id is not None:
        query = query.where(Maintenance.garage_id == garage_id)
    if start_date is not None:
        query = query.where(Maintenance.scheduled_date >= start_date)
    if end_date is not None:
        query = query.where(Maintenance.scheduled_date <= end_date)

    try:
        return list(db.scalars(query).all())
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch maintenances")
        raise UnavailableError("Failed to fetch maintenances", str(exc)) from exc


def get_maintenance(db: Session, maintenance_id: int) -> Maintenance:
    try:
        return get_maintenance_or_raise(db, maintenance_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch maintenance %s", maintenance_id)
        raise UnavailableError("Failed to fetch maintenance", str(exc)) from exc


def create_maintenance(db: Session, payload: MaintenanceCreate) -> Maintenance:
    """Schedule a maintenance record. Capacity is not checked here."""
    try:
        with transaction(db):
            get_car_or_raise(db, payload.car_id)
            get_garage_or_raise(db, payload.garage_id)

            maintenance = Maintenance(**payload.model_dump())
            db.add(maintenance)
            db.flush()
            maintenance_id = maintenance.id
        maintenance = get_maintenance_or_raise(db, maintenance_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to create maintenance")
        raise ConflictError(
            "Failed to create maintenance; no changes were saved",
            str(exc),
        ) from exc

    logger.info(
        "Maintenance created",
        extra={
            "maintenance_id": maintenance.id,
            "garage_id": maintenance.garage_id,
            "scheduled_date": str(maintenance.scheduled_date),
        },
    )
    return maintenance


def update_maintenance(
    db: Session,
    maintenance_id: int,
    payload: MaintenanceUpdate,
) -> Maintenance:
    """Apply a partial update in one transaction, re-validating references."""
    changes = payload.model_dump(exclude_none=True)

    try:
        with transaction(db):
            maintenance = get_maintenance_or_raise(db, maintenance_id)
            if "car_id" in changes:
                get_car_or_raise(db, changes["car_id"])
            if "garage_id" in changes:
                get_garage_or_raise(db, changes["garage_id"])

            for field_name, value in changes.items():
                setattr(maintenance, field_name, value)
        maintenance = get_maintenance_or_raise(db, maintenance_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to update maintenance %s", maintenance_id)
        raise ConflictError(
            "Failed to update maintenance; changes were rolled back",
            str(exc),
        ) from exc

    logger.info("Maintenance updated", extra={"maintenance_id": maintenance_id})
    return maintenance


def delete_maintenance(db: Session, maintenance_id: int) -> None:
    try:
        with transaction(db):
            maintenance = get_maintenance_or_raise(db, maintenance_id)
            db.delete(maintenance)
    except SQLAlchemyError as exc:
        logger.exception("Failed to delete maintenance %s", maintenance_id)
        raise UnavailableError("Failed to delete maintenance", str(exc)) from exc

    logger.info("Maintenance deleted", extra={"maintenance_id": maintenance_id})
