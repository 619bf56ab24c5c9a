"""Tests for car CRUD and garage association replacement."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from garage_manager.core.domain_exceptions import ConflictError, NotFoundError
from garage_manager.db.models import Car, CarGarage
from garage_manager.schemas.car import CarCreate, CarUpdate
from garage_manager.services import car_service


def _associated_ids(db, car_id):
    return sorted(
        db.scalars(select(CarGarage.garage_id).where(CarGarage.car_id == car_id)).all()
    )


def _fail_commit():
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


def _new_car(**overrides):
    data = {
        "make": "Skoda",
        "model": "Octavia",
        "production_year": 2020,
        "license_plate": "PB5678CK",
    }
    data.update(overrides)
    return CarCreate(**data)


class TestCreateCar:
    """Tests for create_car."""

    def test_creates_with_associations(self, db, add_garage):
        first = add_garage(name="North")
        second = add_garage(name="South")

        car = car_service.create_car(db, _new_car(garage_ids=[second.id, first.id]))

        assert car.id is not None
        assert car.garage_ids == sorted([first.id, second.id])
        assert [garage.name for garage in car.garages] == ["North", "South"]

    def test_duplicate_ids_collapse(self, db, add_garage):
        garage = add_garage()

        car = car_service.create_car(db, _new_car(garage_ids=[garage.id, garage.id]))

        assert _associated_ids(db, car.id) == [garage.id]

    def test_without_garages(self, db):
        car = car_service.create_car(db, _new_car())

        assert car.garage_ids == []

    def test_unknown_garage_creates_nothing(self, db, add_garage):
        garage = add_garage()

        with pytest.raises(NotFoundError) as excinfo:
            car_service.create_car(db, _new_car(garage_ids=[garage.id, 404]))

        assert "404" in excinfo.value.details
        assert db.scalar(select(func.count()).select_from(Car)) == 0
        assert db.scalar(select(func.count()).select_from(CarGarage)) == 0

    def test_store_failure_saves_nothing(self, db, add_garage, monkeypatch):
        garage = add_garage()
        monkeypatch.setattr(db, "commit", _fail_commit)

        with pytest.raises(ConflictError):
            car_service.create_car(db, _new_car(garage_ids=[garage.id]))

        assert db.scalar(select(func.count()).select_from(Car)) == 0
        assert db.scalar(select(func.count()).select_from(CarGarage)) == 0

    def test_accepts_camel_case_payload(self, db, add_garage):
        garage = add_garage()
        payload = CarCreate.model_validate(
            {
                "make": "Opel",
                "model": "Astra",
                "productionYear": 2015,
                "licensePlate": "CB0001AA",
                "garageIds": [garage.id],
            }
        )

        car = car_service.create_car(db, payload)

        assert car.production_year == 2015
        assert car.garage_ids == [garage.id]


class TestUpdateCar:
    """Tests for update_car and association replacement."""

    def test_replaces_association_set(self, db, add_garage, add_car):
        first, second, third = add_garage(name="A"), add_garage(name="B"), add_garage(name="C")
        car = add_car(garages=[first, second])

        car_service.update_car(db, car.id, CarUpdate(garage_ids=[second.id, third.id]))

        assert _associated_ids(db, car.id) == sorted([second.id, third.id])

    def test_empty_set_clears_associations(self, db, add_garage, add_car):
        garage = add_garage()
        car = add_car(garages=[garage])

        updated = car_service.update_car(db, car.id, CarUpdate(garage_ids=[]))

        assert updated.garage_ids == []
        assert _associated_ids(db, car.id) == []

    def test_absent_garage_ids_keep_associations(self, db, add_garage, add_car):
        garage = add_garage()
        car = add_car(garages=[garage])

        updated = car_service.update_car(db, car.id, CarUpdate(make="Honda"))

        assert updated.make == "Honda"
        assert updated.model == "Corolla"
        assert _associated_ids(db, car.id) == [garage.id]

    def test_failed_replace_keeps_prior_state(self, db, add_garage, add_car):
        first, second = add_garage(name="A"), add_garage(name="B")
        car = add_car(garages=[first])
        car_id = car.id

        with pytest.raises(NotFoundError):
            car_service.update_car(
                db,
                car_id,
                CarUpdate(make="Changed", garage_ids=[second.id, 999]),
            )

        assert _associated_ids(db, car_id) == [first.id]
        assert db.get(Car, car_id).make == "Toyota"

    def test_store_failure_rolls_back_as_conflict(self, db, add_garage, add_car, monkeypatch):
        first, second = add_garage(name="A"), add_garage(name="B")
        car = add_car(garages=[first])
        car_id = car.id
        monkeypatch.setattr(db, "commit", _fail_commit)

        with pytest.raises(ConflictError) as excinfo:
            car_service.update_car(
                db,
                car_id,
                CarUpdate(make="Changed", garage_ids=[second.id]),
            )

        assert "disk I/O error" in excinfo.value.details
        assert _associated_ids(db, car_id) == [first.id]
        assert db.get(Car, car_id).make == "Toyota"

    def test_unknown_car_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            car_service.update_car(db, 77, CarUpdate(make="Nope"))


class TestListCars:
    """Tests for list_cars filters."""

    def test_filters(self, db, add_garage, add_car):
        garage = add_garage()
        old = add_car(make="Toyota", production_year=2005, garages=[garage])
        new = add_car(make="Tesla", model="Model 3", production_year=2021)
        add_car(make="BMW", model="X5", production_year=2012, garages=[garage])

        assert [car.id for car in car_service.list_cars(db, make="t")] == [old.id, new.id]
        assert [car.make for car in car_service.list_cars(db, garage_id=garage.id)] == [
            "Toyota",
            "BMW",
        ]
        assert [car.make for car in car_service.list_cars(db, from_year=2010, to_year=2021)] == [
            "Tesla",
            "BMW",
        ]


class TestDeleteCar:
    """Tests for delete_car."""

    def test_removes_associations(self, db, add_garage, add_car):
        garage = add_garage()
        car = add_car(garages=[garage])
        car_id = car.id

        car_service.delete_car(db, car_id)

        assert db.get(Car, car_id) is None
        assert _associated_ids(db, car_id) == []

    def test_rejects_car_with_maintenance(self, db, add_garage, add_car, add_maintenance):
        garage = add_garage()
        car = add_car(garages=[garage])
        add_maintenance(car, garage, "2024-01-01")

        with pytest.raises(ConflictError):
            car_service.delete_car(db, car.id)

        assert _associated_ids(db, car.id) == [garage.id]

    def test_unknown_car_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            car_service.delete_car(db, 5)
