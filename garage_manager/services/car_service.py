"""Business logic for cars and their garage associations."""

import logging
from collections.abc import Iterable

from sqlalchemy import delete, exists, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from garage_manager.core.domain_exceptions import (
    ConflictError,
    NotFoundError,
    UnavailableError,
)
from garage_manager.db.models import Car, CarGarage, Garage, Maintenance
from garage_manager.db.session import transaction
from garage_manager.schemas.car import CarCreate, CarUpdate

logger = logging.getLogger(__name__)


def get_car_or_raise(db: Session, car_id: int) -> Car:
    car = db.get(Car, car_id)
    if car is None:
        raise NotFoundError("Car not found", f"No car found with id {car_id}")
    return car


def _unique_ids(garage_ids: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(garage_ids))


def _associate_garages(db: Session, car_id: int, garage_ids: list[int]) -> None:
    """Insert one join row per garage; every garage must exist."""
    if not garage_ids:
        return

    found = set(db.scalars(select(Garage.id).where(Garage.id.in_(garage_ids))).all())
    missing = [garage_id for garage_id in garage_ids if garage_id not in found]
    if missing:
        raise NotFoundError(
            "Garage not found",
            "No garage found with id " + ", ".join(str(garage_id) for garage_id in missing),
        )

    db.execute(
        insert(CarGarage),
        [{"car_id": car_id, "garage_id": garage_id} for garage_id in garage_ids],
    )


def _clear_car_garages(db: Session, car_id: int) -> None:
    db.execute(
        delete(CarGarage)
        .where(CarGarage.car_id == car_id)
        .execution_options(synchronize_session=False)
    )


def replace_car_garages(db: Session, car_id: int, garage_ids: Iterable[int]) -> None:
    """Make ``garage_ids`` the car's exact association set.

    Runs inside the caller's transaction: the delete is only kept if every
    insert succeeds.
    """
    _clear_car_garages(db, car_id)
    _associate_garages(db, car_id, _unique_ids(garage_ids))


def list_cars(
    db: Session,
    make: str | None = None,
    garage_id: int | None = None,
    from_year: int | None = None,
    to_year: int | None = None,
) -> list[Car]:
    query = select(Car).options(selectinload(Car.garages)).order_by(Car.id.asc())

    if make:
        query = query.where(Car.make.ilike(f"%{make}%"))
    if garage_id is not None:
        query = query.where(
            exists().where(CarGarage.car_id == Car.id, CarGarage.garage_id == garage_id)
        )
    if from_year is not None:
        query = query.where(Car.production_year >= from_year)
    if to_year is not None:
        query = query.where(Car.production_year <= to_year)

    try:
        return list(db.scalars(query).all())
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch cars")
        raise UnavailableError("Failed to fetch cars", str(exc)) from exc


def get_car(db: Session, car_id: int) -> Car:
    try:
        return get_car_or_raise(db, car_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch car %s", car_id)
        raise UnavailableError("Failed to fetch car", str(exc)) from exc


def create_car(db: Session, payload: CarCreate) -> Car:
    """Insert the car and its garage associations together."""
    try:
        with transaction(db):
            car = Car(**payload.model_dump(exclude={"garage_ids"}))
            db.add(car)
            db.flush()
            _associate_garages(db, car.id, _unique_ids(payload.garage_ids))
        db.refresh(car)
    except SQLAlchemyError as exc:
        logger.exception("Failed to create car")
        raise ConflictError(
            "Failed to create car; no changes were saved",
            str(exc),
        ) from exc

    logger.info(
        "Car created",
        extra={"car_id": car.id, "garage_ids": car.garage_ids},
    )
    return car


def update_car(db: Session, car_id: int, payload: CarUpdate) -> Car:
    """Apply a partial update; a present ``garage_ids`` replaces all associations."""
    try:
        with transaction(db):
            car = get_car_or_raise(db, car_id)
            for field_name, value in payload.model_dump(
                exclude={"garage_ids"},
                exclude_none=True,
            ).items():
                setattr(car, field_name, value)

            if payload.garage_ids is not None:
                replace_car_garages(db, car_id, payload.garage_ids)
        db.refresh(car)
    except SQLAlchemyError as exc:
        logger.exception("Failed to update car %s", car_id)
        raise ConflictError(
            "Failed to update car; changes were rolled back",
            str(exc),
        ) from exc

    logger.info("Car updated", extra={"car_id": car_id})
    return car


def delete_car(db: Session, car_id: int) -> None:
    """Delete a car and its associations; cars with maintenance records are kept."""
    try:
        with transaction(db):
            car = get_car_or_raise(db, car_id)

            if db.scalar(select(exists().where(Maintenance.car_id == car_id))):
                raise ConflictError(
                    "Car is in use",
                    f"Car {car_id} is referenced by maintenance records.",
                )

            _clear_car_garages(db, car_id)
            db.delete(car)
    except SQLAlchemyError as exc:
        logger.exception("Failed to delete car %s", car_id)
        raise UnavailableError("Failed to delete car", str(exc)) from exc

    logger.info("Car deleted", extra={"car_id": car_id})
