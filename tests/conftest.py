"""Shared fixtures: an in-memory database per test and a bound API client."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert

from garage_manager.core.config import Settings
from garage_manager.db.init_db import init_db
from garage_manager.db.models import Car, CarGarage, Garage, Maintenance
from garage_manager.db.session import build_session_factory, create_db_engine
from garage_manager.main import create_app


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app = create_app(Settings(database_url="sqlite://", log_level="WARNING"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def add_garage(db):
    def _add_garage(name="Central Garage", capacity=2, city="Sofia", location="Vitosha 1"):
        garage = Garage(name=name, location=location, city=city, capacity=capacity)
        db.add(garage)
        db.commit()
        return garage

    return _add_garage


@pytest.fixture
def add_car(db):
    def _add_car(make="Toyota", model="Corolla", production_year=2018,
                 license_plate="CA1234AB", garages=()):
        car = Car(
            make=make,
            model=model,
            production_year=production_year,
            license_plate=license_plate,
        )
        db.add(car)
        db.flush()
        if garages:
            db.execute(
                insert(CarGarage),
                [{"car_id": car.id, "garage_id": garage.id} for garage in garages],
            )
        db.commit()
        return car

    return _add_car


@pytest.fixture
def add_maintenance(db):
    def _add_maintenance(car, garage, scheduled_date, service_type="Oil change"):
        if isinstance(scheduled_date, str):
            scheduled_date = date.fromisoformat(scheduled_date)
        record = Maintenance(
            car_id=car.id,
            garage_id=garage.id,
            service_type=service_type,
            scheduled_date=scheduled_date,
        )
        db.add(record)
        db.commit()
        return record

    return _add_maintenance
