import datetime

from garage_manager.schemas.common import CamelModel


class DailyAvailabilityItem(CamelModel):
    date: datetime.date
    requests: int
    available_capacity: int


class YearMonth(CamelModel):
    year: str
    month: str


class MonthlyRequestsItem(CamelModel):
    year_month: YearMonth
    requests: int
