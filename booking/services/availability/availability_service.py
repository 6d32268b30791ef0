from typing import Optional
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from booking.config.settings import get_settings
from booking.core.exceptions import AvailabilityFetchError
from booking.models.business import Business
from booking.models.service import Service
from booking.schemas.scheduling import ServiceDescriptor, SlotListResult
from booking.services.appointment.appointment_query_service import AppointmentQueryService
from booking.services.availability.availability_resolver import AvailabilityResolver
from booking.services.availability.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)

NO_SLOTS_MESSAGE = "No available time slots for this day"
FETCH_FAILED_MESSAGE = "Failed to fetch availability"


class AvailabilityService:
    """Entry point for slot requests: loads inputs, resolves, generates"""

    @staticmethod
    def get_time_slots(
            db: Session,
            business_id: UUID,
            target_date: date,
            service_id: int,
            now: Optional[datetime] = None
    ) -> SlotListResult:
        """
        Compute the slot list for one date and service of a business.

        Data-access failures never propagate: they produce an empty list with
        `error=True` and a message the client can show before retrying.

        Raises:
            LookupError: if the service does not exist for this business
        """
        try:
            service = AvailabilityService.get_service(db, business_id, service_id)
            if now is None:
                now = AvailabilityService.business_now(service.business)
        except SQLAlchemyError as e:
            logger.error(f"Service lookup failed for {service_id}: {e}", exc_info=True)
            return SlotListResult(
                date=target_date,
                service_id=service_id,
                error=True,
                message=FETCH_FAILED_MESSAGE
            )

        descriptor = ServiceDescriptor(
            id=service.serv_id,
            duration=service.serv_min_duration,
            business_id=service.bus_id,
            name=service.serv_name,
        )

        try:
            eligible = AvailabilityResolver.resolve(db, target_date, descriptor)
            booked = AppointmentQueryService.get_booked_datetimes(db, business_id, target_date)
        except AvailabilityFetchError:
            return SlotListResult(
                date=target_date,
                service_id=service_id,
                error=True,
                message=FETCH_FAILED_MESSAGE
            )

        slots = SlotGenerator.generate(target_date, descriptor, eligible, booked, now=now)
        logger.info(f"Generated {len(slots)} slots for service {service_id} on {target_date}")

        return SlotListResult(
            date=target_date,
            service_id=service_id,
            slots=slots,
            message=None if slots else NO_SLOTS_MESSAGE
        )

    @staticmethod
    def get_service(db: Session, business_id: UUID, service_id: int) -> Service:
        service = db.query(Service).options(
            joinedload(Service.business)
        ).filter(
            Service.serv_id == service_id,
            Service.bus_id == business_id
        ).first()

        if not service:
            raise LookupError(f"Service {service_id} not found")

        return service

    @staticmethod
    def business_now(business: Optional[Business]) -> datetime:
        """Current wall-clock time in the business timezone, without tzinfo"""
        tz_name = (business.timezone if business else None) or get_settings().DEFAULT_TIMEZONE

        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.error(f"Invalid timezone '{tz_name}', using UTC")
            tz = ZoneInfo("UTC")

        return datetime.now(tz).replace(tzinfo=None)
