from pydantic import Field

from garage_manager.schemas.common import CamelModel


class GarageCreate(CamelModel):
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    city: str = Field(min_length=1)
    capacity: int = Field(ge=0)


class GarageUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1)
    city: str | None = Field(default=None, min_length=1)
    capacity: int | None = Field(default=None, ge=0)


class GarageRead(CamelModel):
    id: int
    name: str
    location: str
    city: str
    capacity: int
