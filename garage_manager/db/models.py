"""SQLAlchemy ORM models."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garage_manager.db.session import Base


class Garage(Base):
    """A maintenance facility with a fixed number of daily slots."""

    __tablename__ = "garages"
    __table_args__ = (
        CheckConstraint("capacity >= 0", name="ck_garages_capacity_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    maintenances: Mapped[list["Maintenance"]] = relationship(back_populates="garage")


class Car(Base):
    """A vehicle that can be serviced at one or more garages."""

    __tablename__ = "cars"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    make: Mapped[str] = mapped_column(String(255), nullable=False)
    model: Mapped[str] = mapped_column(String(255), nullable=False)
    production_year: Mapped[int] = mapped_column(Integer, nullable=False)
    license_plate: Mapped[str] = mapped_column(String(32), nullable=False)

    # Writes go through CarGarage rows; this side is read-only.
    garages: Mapped[list["Garage"]] = relationship(
        secondary="car_garages",
        order_by="Garage.id",
        viewonly=True,
    )
    maintenances: Mapped[list["Maintenance"]] = relationship(back_populates="car")

    @property
    def garage_ids(self) -> list[int]:
        return [garage.id for garage in self.garages]


class CarGarage(Base):
    """Join row linking a car to a garage."""

    __tablename__ = "car_garages"

    car_id: Mapped[int] = mapped_column(
        ForeignKey("cars.id", ondelete="CASCADE"),
        primary_key=True,
    )
    garage_id: Mapped[int] = mapped_column(
        ForeignKey("garages.id"),
        primary_key=True,
        index=True,
    )


class Maintenance(Base):
    """One scheduled service event for a car at a garage."""

    __tablename__ = "maintenance"
    __table_args__ = (
        Index("ix_maintenance_garage_date", "garage_id", "scheduled_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    car_id: Mapped[int] = mapped_column(
        ForeignKey("cars.id"),
        nullable=False,
        index=True,
    )
    garage_id: Mapped[int] = mapped_column(
        ForeignKey("garages.id"),
        nullable=False,
    )

    service_type: Mapped[str] = mapped_column(String(255), nullable=False)
    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False)

    car: Mapped["Car"] = relationship(back_populates="maintenances")
    garage: Mapped["Garage"] = relationship(back_populates="maintenances")

    @property
    def car_name(self) -> str:
        return f"{self.car.make} {self.car.model}"

    @property
    def garage_name(self) -> str:
        return self.garage.name
