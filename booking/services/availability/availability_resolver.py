# ============================================================================
# booking/services/availability/availability_resolver.py
# Which employees can take a service on a given date, and when
# ============================================================================
from datetime import date
from typing import Iterable, List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from booking.config.settings import get_settings
from booking.core.exceptions import AvailabilityFetchError
from booking.models.employee import Employee, EmployeeAvailability
from booking.schemas.scheduling import (
    AvailabilityWindow,
    AvailabilityWithEmployee,
    EmployeeSummary,
    ServiceDescriptor,
)
from booking.services.availability.day_time import (
    day_index_for_date,
    normalize_day_index,
)

logger = logging.getLogger(__name__)


class AvailabilityResolver:
    """Resolves eligible availability windows for a (date, service) pair"""

    @staticmethod
    def resolve(
            db: Session,
            target_date: date,
            service: ServiceDescriptor
    ) -> List[AvailabilityWithEmployee]:
        """
        Return the availability windows on the weekday of `target_date` whose
        employee can perform `service`.

        Raises:
            AvailabilityFetchError: if the data store could not be read
        """
        day_index = day_index_for_date(target_date)

        try:
            rows = AvailabilityResolver._fetch_rows(db, service.business_id)
        except SQLAlchemyError as e:
            logger.error(f"Availability query failed for {target_date}: {e}", exc_info=True)
            raise AvailabilityFetchError("Failed to fetch availability") from e

        entries = [AvailabilityResolver._to_entry(row) for row in rows]
        eligible = AvailabilityResolver.select_eligible(entries, day_index, service.id)

        logger.info(
            f"Resolved {len(eligible)} eligible availability windows "
            f"for service {service.id} on {target_date} (day {day_index})"
        )
        return eligible

    @staticmethod
    def select_eligible(
            entries: Iterable[AvailabilityWithEmployee],
            day_index: str,
            service_id: int
    ) -> List[AvailabilityWithEmployee]:
        """Keep entries on the requested day whose employee is linked to the service"""
        eligible = []

        for entry in entries:
            # Inconsistent joins can leave the employee missing
            if entry.employee is None:
                logger.warning(f"Skipping availability without employee: {entry.availability}")
                continue

            if normalize_day_index(entry.availability.avail_day) != day_index:
                continue

            if service_id not in entry.employee.service_ids:
                continue

            eligible.append(entry)

        return eligible

    @staticmethod
    def _fetch_rows(
            db: Session,
            business_id: Optional[UUID]
    ) -> List[EmployeeAvailability]:
        """
        All availability rows of the business with employee and links loaded.
        Days are matched afterwards by `select_eligible` through the day
        normalizer.
        """
        query = db.query(EmployeeAvailability).options(
            joinedload(EmployeeAvailability.employee).selectinload(Employee.service_links)
        )

        if business_id is not None:
            query = query.join(Employee, EmployeeAvailability.employee).filter(
                Employee.bus_id == business_id
            )

        return query.order_by(EmployeeAvailability.emp_avail_id.asc()).all()

    @staticmethod
    def _to_entry(row: EmployeeAvailability) -> AvailabilityWithEmployee:
        """Copy an ORM row into a typed, detached record"""
        employee = None
        if row.employee is not None:
            employee = EmployeeSummary(
                id=row.employee.emp_id,
                name=row.employee.display_name or get_settings().FALLBACK_EMPLOYEE_NAME,
                service_ids=frozenset(row.employee.service_ids),
            )

        return AvailabilityWithEmployee(
            availability=AvailabilityWindow(
                avail_day=str(row.avail_day),
                start_time=row.start_time,
                end_time=row.end_time,
            ),
            employee=employee,
        )
