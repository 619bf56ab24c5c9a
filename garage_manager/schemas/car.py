from pydantic import Field

from garage_manager.schemas.common import CamelModel
from garage_manager.schemas.garage import GarageRead


class CarCreate(CamelModel):
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    production_year: int = Field(ge=1886)
    license_plate: str = Field(min_length=1)
    garage_ids: list[int] = Field(default_factory=list)


class CarUpdate(CamelModel):
    """Partial update. ``garage_ids`` replaces the whole association set when present."""

    make: str | None = Field(default=None, min_length=1)
    model: str | None = Field(default=None, min_length=1)
    production_year: int | None = Field(default=None, ge=1886)
    license_plate: str | None = Field(default=None, min_length=1)
    garage_ids: list[int] | None = None


class CarRead(CamelModel):
    id: int
    make: str
    model: str
    production_year: int
    license_plate: str
    garage_ids: list[int]
    garages: list[GarageRead]
