# ============================================================================
# booking/services/appointment/appointment_service.py
# ============================================================================
"""Service for confirming bookings"""
from datetime import datetime
from typing import Optional
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from booking.core.exceptions import AvailabilityFetchError, SlotTakenError
from booking.models.appointment import Appointment
from booking.models.customer import Customer
from booking.schemas.booking import BookingRequest
from booking.services.availability.availability_service import AvailabilityService

logger = logging.getLogger(__name__)


class BookingService:
    """Handles appointment creation"""

    @staticmethod
    def confirm_booking(
            db: Session,
            business_id: UUID,
            request: BookingRequest,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Create the customer and the appointment in one transaction.

        The slot is re-checked against current availability first; the
        (employee, datetime) uniqueness constraint catches bookings that
        race past that check.

        Raises:
            LookupError: unknown service
            ValueError: the requested time is not offered for this service
            SlotTakenError: the slot is no longer available
            AvailabilityFetchError: availability could not be read
        """
        result = AvailabilityService.get_time_slots(
            db, business_id, request.date, request.service_id, now=now
        )
        if result.error:
            raise AvailabilityFetchError(result.message or "Failed to fetch availability")

        candidates = [
            slot for slot in result.slots
            if slot.time == request.time
            and (request.employee_id is None or slot.employee_id == request.employee_id)
        ]
        if not candidates:
            raise ValueError(f"{request.time} is not offered for this service on {request.date}")

        slot = next((s for s in candidates if s.available), None)
        if slot is None:
            raise SlotTakenError()

        hours, minutes = (int(part) for part in slot.time.split(":"))
        appointment_datetime = datetime.combine(request.date, datetime.min.time()).replace(
            hour=hours, minute=minutes
        )

        customer_data = request.customer
        customer = Customer(
            cust_fname=customer_data.first_name,
            cust_lname=customer_data.last_name,
            cust_email=customer_data.email,
            cust_phone=customer_data.phone,
        )

        try:
            db.add(customer)
            db.flush()

            appointment = Appointment(
                bus_id=business_id,
                serv_id=request.service_id,
                emp_id=slot.employee_id,
                cust_id=customer.cust_id,
                cust_phone=customer_data.phone,
                app_datetime=appointment_datetime,
            )
            db.add(appointment)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Slot {appointment_datetime} for employee {slot.employee_id} already booked: {e}")
            raise SlotTakenError() from e
        except SQLAlchemyError:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(
            f"Booked appointment {appointment.app_id} at {appointment_datetime} "
            f"with employee {slot.employee_id} for business {business_id}"
        )
        return appointment
