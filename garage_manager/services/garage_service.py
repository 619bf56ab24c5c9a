"""Business logic for garage CRUD."""

import logging

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from garage_manager.core.domain_exceptions import (
    ConflictError,
    NotFoundError,
    UnavailableError,
)
from garage_manager.db.models import CarGarage, Garage, Maintenance
from garage_manager.db.session import transaction
from garage_manager.schemas.garage import GarageCreate, GarageUpdate

logger = logging.getLogger(__name__)


def get_garage_or_raise(db: Session, garage_id: int) -> Garage:
    garage = db.get(Garage, garage_id)
    if garage is None:
        raise NotFoundError("Garage not found", f"No garage found with id {garage_id}")
    return garage


def list_garages(db: Session, city: str | None = None) -> list[Garage]:
    query = select(Garage).order_by(Garage.id.asc())
    if city:
        query = query.where(Garage.city == city)

    try:
        return list(db.scalars(query).all())
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch garages")
        raise UnavailableError("Failed to fetch garages", str(exc)) from exc


def get_garage(db: Session, garage_id: int) -> Garage:
    try:
        return get_garage_or_raise(db, garage_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch garage %s", garage_id)
        raise UnavailableError("Failed to fetch garage", str(exc)) from exc


def create_garage(db: Session, payload: GarageCreate) -> Garage:
    try:
        with transaction(db):
            garage = Garage(**payload.model_dump())
            db.add(garage)
        db.refresh(garage)
    except SQLAlchemyError as exc:
        logger.exception("Failed to create garage")
        raise UnavailableError("Failed to create garage", str(exc)) from exc

    logger.info("Garage created", extra={"garage_id": garage.id})
    return garage


def update_garage(db: Session, garage_id: int, payload: GarageUpdate) -> Garage:
    """Apply only the fields present in ``payload``."""
    try:
        with transaction(db):
            garage = get_garage_or_raise(db, garage_id)
            for field_name, value in payload.model_dump(exclude_none=True).items():
                setattr(garage, field_name, value)
        db.refresh(garage)
    except SQLAlchemyError as exc:
        logger.exception("Failed to update garage %s", garage_id)
        raise UnavailableError("Failed to update garage", str(exc)) from exc

    logger.info("Garage updated", extra={"garage_id": garage_id})
    return garage


def delete_garage(db: Session, garage_id: int) -> None:
    """Delete a garage nothing refers to.

    Garages still referenced by maintenance records or car associations are
    rejected with ``ConflictError`` instead of being cascaded away.
    """
    try:
        with transaction(db):
            garage = get_garage_or_raise(db, garage_id)

            has_maintenance = db.scalar(
                select(exists().where(Maintenance.garage_id == garage_id))
            )
            has_cars = db.scalar(
                select(exists().where(CarGarage.garage_id == garage_id))
            )
            if has_maintenance or has_cars:
                raise ConflictError(
                    "Garage is in use",
                    f"Garage {garage_id} is referenced by maintenance records "
                    "or car associations.",
                )

            db.delete(garage)
    except SQLAlchemyError as exc:
        logger.exception("Failed to delete garage %s", garage_id)
        raise UnavailableError("Failed to delete garage", str(exc)) from exc

    logger.info("Garage deleted", extra={"garage_id": garage_id})
