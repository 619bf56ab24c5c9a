"""Tests for garage CRUD."""

import pytest

from garage_manager.core.domain_exceptions import ConflictError, NotFoundError
from garage_manager.db.models import Garage
from garage_manager.schemas.garage import GarageCreate, GarageUpdate
from garage_manager.services import garage_service


class TestGarageCrud:
    """Tests for create, list, get and update."""

    def test_create_and_get(self, db):
        created = garage_service.create_garage(
            db,
            GarageCreate(name="Central", location="Vitosha 1", city="Sofia", capacity=3),
        )

        fetched = garage_service.get_garage(db, created.id)

        assert fetched.name == "Central"
        assert fetched.capacity == 3

    def test_list_filters_by_city(self, db, add_garage):
        add_garage(name="A", city="Sofia")
        add_garage(name="B", city="Plovdiv")
        add_garage(name="C", city="Sofia")

        assert [g.name for g in garage_service.list_garages(db)] == ["A", "B", "C"]
        assert [g.name for g in garage_service.list_garages(db, city="Sofia")] == ["A", "C"]

    def test_partial_update(self, db, add_garage):
        garage = add_garage(name="Old", capacity=2)

        updated = garage_service.update_garage(db, garage.id, GarageUpdate(capacity=5))

        assert updated.capacity == 5
        assert updated.name == "Old"

    def test_get_unknown_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            garage_service.get_garage(db, 12)

    def test_update_unknown_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            garage_service.update_garage(db, 12, GarageUpdate(name="X"))

    def test_negative_capacity_rejected_by_schema(self):
        with pytest.raises(ValueError):
            GarageCreate(name="A", location="B", city="C", capacity=-1)


class TestDeleteGarage:
    """Tests for delete_garage."""

    def test_deletes_unreferenced_garage(self, db, add_garage):
        garage = add_garage()
        garage_id = garage.id

        garage_service.delete_garage(db, garage_id)

        assert db.get(Garage, garage_id) is None

    def test_rejects_garage_with_maintenance(self, db, add_garage, add_car, add_maintenance):
        garage = add_garage()
        add_maintenance(add_car(), garage, "2024-01-01")

        with pytest.raises(ConflictError):
            garage_service.delete_garage(db, garage.id)

        assert db.get(Garage, garage.id) is not None

    def test_rejects_garage_with_car_association(self, db, add_garage, add_car):
        garage = add_garage()
        add_car(garages=[garage])

        with pytest.raises(ConflictError):
            garage_service.delete_garage(db, garage.id)

    def test_unknown_garage_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            garage_service.delete_garage(db, 3)
