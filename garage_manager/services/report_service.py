"""Business logic for garage availability and request-volume reporting."""

import logging
from calendar import monthrange
from collections.abc import Iterator
from datetime import date, timedelta

from sqlalchemy import extract, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from garage_manager.core.domain_exceptions import NotFoundError, UnavailableError
from garage_manager.db.models import Garage, Maintenance
from garage_manager.schemas.report import (
    DailyAvailabilityItem,
    MonthlyRequestsItem,
    YearMonth,
)

logger = logging.getLogger(__name__)


def _iter_days(start_date: date, end_date: date) -> Iterator[date]:
    # Offsets never step past end_date, so date.max is a valid bound.
    for offset in range((end_date - start_date).days + 1):
        yield start_date + timedelta(days=offset)


def _last_of_month(month: date) -> date:
    return month.replace(day=monthrange(month.year, month.month)[1])


def get_daily_availability_report(
    db: Session,
    garage_id: int,
    start_date: date,
    end_date: date,
) -> list[DailyAvailabilityItem]:
    """Return remaining capacity for every day in ``[start_date, end_date]``.

    Days without maintenance are included with zero requests. Capacity goes
    negative when a day is over-booked. An inverted range yields an empty
    list once the garage is known to exist.
    """
    try:
        garage = db.get(Garage, garage_id)
        if garage is None:
            logger.warning("No garage found with id %s", garage_id)
            raise NotFoundError(
                "Garage not found",
                f"No garage found with id {garage_id}",
            )

        if start_date > end_date:
            return []

        logger.debug(
            "Building availability report for garage %s between %s and %s",
            garage_id,
            start_date,
            end_date,
        )

        rows = db.execute(
            select(Maintenance.scheduled_date, func.count(Maintenance.id))
            .where(Maintenance.garage_id == garage_id)
            .where(Maintenance.scheduled_date >= start_date)
            .where(Maintenance.scheduled_date <= end_date)
            .group_by(Maintenance.scheduled_date)
        ).all()
        capacity = garage.capacity
    except SQLAlchemyError as exc:
        logger.exception("Failed to generate availability report for garage %s", garage_id)
        raise UnavailableError(
            "Failed to fetch daily availability report",
            str(exc),
        ) from exc

    requests_by_day = {scheduled_date: int(count) for scheduled_date, count in rows}

    report = []
    for day in _iter_days(start_date, end_date):
        requests = requests_by_day.get(day, 0)
        report.append(
            DailyAvailabilityItem(
                date=day,
                requests=requests,
                available_capacity=capacity - requests,
            )
        )
    return report


def get_monthly_requests_report(
    db: Session,
    garage_id: int,
    start_month: date,
    end_month: date,
) -> list[MonthlyRequestsItem]:
    """Count maintenance requests per month for a garage.

    Only the year and month of ``start_month``/``end_month`` matter. Months
    without any request are left out rather than reported as zero. An
    unknown garage simply has no rows.
    """
    range_start = start_month.replace(day=1)
    range_end = _last_of_month(end_month)
    if range_start > range_end:
        return []

    year_col = extract("year", Maintenance.scheduled_date)
    month_col = extract("month", Maintenance.scheduled_date)

    try:
        rows = db.execute(
            select(
                year_col.label("year"),
                month_col.label("month"),
                func.count(Maintenance.id).label("requests"),
            )
            .where(Maintenance.garage_id == garage_id)
            .where(Maintenance.scheduled_date >= range_start)
            .where(Maintenance.scheduled_date <= range_end)
            .group_by(year_col, month_col)
            .order_by(year_col, month_col)
        ).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to generate monthly report for garage %s", garage_id)
        raise UnavailableError(
            "Failed to fetch monthly requests report",
            str(exc),
        ) from exc

    logger.debug("Monthly report for garage %s has %d months", garage_id, len(rows))

    return [
        MonthlyRequestsItem(
            year_month=YearMonth(
                year=f"{int(row.year):04d}",
                month=f"{int(row.month):02d}",
            ),
            requests=int(row.requests),
        )
        for row in rows
    ]
