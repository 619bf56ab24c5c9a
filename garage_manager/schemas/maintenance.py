from datetime import date

from pydantic import Field

from garage_manager.schemas.common import CamelModel


class MaintenanceCreate(CamelModel):
    car_id: int
    garage_id: int
    service_type: str = Field(min_length=1)
    scheduled_date: date


class MaintenanceUpdate(CamelModel):
    car_id: int | None = None
    garage_id: int | None = None
    service_type: str | None = Field(default=None, min_length=1)
    scheduled_date: date | None = None


class MaintenanceRead(CamelModel):
    id: int
    car_id: int
    car_name: str
    garage_id: int
    garage_name: str
    service_type: str
    scheduled_date: date
