# ============================================================================
# FILE: booking/services/appointment/appointment_query_service.py
# Read-side appointment logic - no FastAPI dependencies, fully testable
# ============================================================================
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, date, time
from typing import Any, Dict, List
from uuid import UUID
import logging

from booking.core.exceptions import AvailabilityFetchError
from booking.models.appointment import Appointment
from booking.models.employee import Employee
from booking.models.service import Service
from booking.services.availability.day_time import format_time_for_display

logger = logging.getLogger(__name__)

# Day window used for appointment lookups: [00:00:00, 23:59:59)
DAY_END = time(23, 59, 59)


class AppointmentQueryService:
    """Service layer for reading appointments."""

    @staticmethod
    def day_bounds(target_date: date):
        return datetime.combine(target_date, time.min), datetime.combine(target_date, DAY_END)

    @staticmethod
    def get_booked_datetimes(
            db: Session,
            business_id: UUID,
            target_date: date
    ) -> List[datetime]:
        """
        Start date-times of the business's appointments on `target_date`.

        Raises:
            AvailabilityFetchError: if the appointment query fails
        """
        day_start, day_end = AppointmentQueryService.day_bounds(target_date)

        try:
            rows = db.query(Appointment.app_datetime).filter(
                Appointment.bus_id == business_id,
                Appointment.app_datetime >= day_start,
                Appointment.app_datetime < day_end
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Appointment query failed for {business_id} on {target_date}: {e}", exc_info=True)
            raise AvailabilityFetchError("Failed to fetch appointments") from e

        return [row.app_datetime for row in rows]

    @staticmethod
    def list_day_appointments(
            db: Session,
            business_id: UUID,
            target_date: date
    ) -> Dict[str, Any]:
        """All appointments of one day with customer, service and employee details."""
        day_start, day_end = AppointmentQueryService.day_bounds(target_date)

        appointments = db.query(Appointment).options(
            joinedload(Appointment.customer),
            joinedload(Appointment.service),
            joinedload(Appointment.employee)
        ).filter(
            Appointment.bus_id == business_id,
            Appointment.app_datetime >= day_start,
            Appointment.app_datetime < day_end
        ).order_by(Appointment.app_datetime.asc()).all()

        return {
            "business_id": str(business_id),
            "date": target_date.isoformat(),
            "total_appointments": len(appointments),
            "appointments": [
                AppointmentQueryService._serialize_appointment(appt) for appt in appointments
            ]
        }

    @staticmethod
    def get_dashboard_stats(
            db: Session,
            business_id: UUID,
            today: date
    ) -> Dict[str, Any]:
        """Counts shown on the dashboard header."""
        day_start, day_end = AppointmentQueryService.day_bounds(today)

        services_count = db.query(Service).filter(Service.bus_id == business_id).count()
        employees_count = db.query(Employee).filter(Employee.bus_id == business_id).count()
        today_count = db.query(Appointment).filter(
            Appointment.bus_id == business_id,
            Appointment.app_datetime >= day_start,
            Appointment.app_datetime < day_end
        ).count()
        upcoming_count = db.query(Appointment).filter(
            Appointment.bus_id == business_id,
            Appointment.app_datetime >= day_start
        ).count()

        return {
            "business_id": str(business_id),
            "date": today.isoformat(),
            "total_services": services_count,
            "total_employees": employees_count,
            "todays_appointments": today_count,
            "upcoming_appointments": upcoming_count,
        }

    @staticmethod
    def _serialize_appointment(appt: Appointment) -> Dict[str, Any]:
        customer = appt.customer
        service = appt.service
        employee = appt.employee

        return {
            "app_id": appt.app_id,
            "app_datetime": appt.app_datetime.isoformat(),
            "time": format_time_for_display(appt.app_datetime.time()),
            "customer": {
                "cust_id": customer.cust_id,
                "name": f"{customer.cust_fname} {customer.cust_lname or ''}".strip(),
                "email": customer.cust_email,
                "phone": customer.cust_phone,
            } if customer else None,
            "service": {
                "serv_id": service.serv_id,
                "serv_name": service.serv_name,
                "serv_min_duration": service.serv_min_duration,
            } if service else None,
            "employee": {
                "emp_id": employee.emp_id,
                "name": employee.display_name,
            } if employee else None,
        }
