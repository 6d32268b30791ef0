# ============================================================================
# booking/services/availability/slot_generator.py
# Expands availability windows into discrete, duration-sized slots
# ============================================================================
"""
Pure computation, no I/O. Given the same inputs (including `now`) the
generator always returns the same ordered list.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Set, Union
import logging
import re

from booking.config.settings import get_settings
from booking.schemas.scheduling import AvailabilityWithEmployee, ServiceDescriptor, TimeSlot

logger = logging.getLogger(__name__)

# Hour:minute of a bare time or of the time part of a date-time string
_BOOKED_TIME = re.compile(r"(?:^|[T\s])(\d{1,2}):(\d{2})")

MINUTES_PER_DAY = 24 * 60


class SlotGenerator:
    """Builds the ordered slot list for one date and service"""

    @staticmethod
    def generate(
            target_date: date,
            service: ServiceDescriptor,
            eligible: Iterable[AvailabilityWithEmployee],
            booked_datetimes: Iterable[Union[datetime, str]],
            now: Optional[datetime] = None
    ) -> List[TimeSlot]:
        """
        Generate slots for every eligible availability window.

        A slot is unavailable when its start lies before `now` or when its
        HH:MM matches a booked date-time (seconds and offsets ignored).
        Duplicate (time, employee) pairs are dropped and the result is sorted
        by time.
        """
        if now is None:
            now = datetime.now()

        duration = SlotGenerator._duration_minutes(service)
        booked = SlotGenerator.booked_times(booked_datetimes)

        slots = []
        for entry in eligible:
            slots.extend(
                SlotGenerator._slots_for_window(target_date, entry, duration, booked, now)
            )

        unique = {}
        for slot in slots:
            key = (slot.time, slot.employee_id)
            if key not in unique:
                unique[key] = slot

        return sorted(unique.values(), key=lambda s: s.time)

    @staticmethod
    def booked_times(booked_datetimes: Iterable[Union[datetime, str]]) -> Set[str]:
        """HH:MM labels of booked date-times"""
        booked = set()

        for value in booked_datetimes or []:
            if isinstance(value, (datetime, time)):
                booked.add(value.strftime("%H:%M"))
                continue

            match = _BOOKED_TIME.search(str(value)) if value is not None else None
            if not match:
                logger.warning(f"Failed to parse appointment datetime: {value!r}")
                continue

            hours, minutes = int(match.group(1)), int(match.group(2))
            booked.add(f"{hours:02d}:{minutes:02d}")

        return booked

    @staticmethod
    def parse_time_of_day(value: Union[str, time, None], round_up: bool = False) -> Optional[int]:
        """
        Minutes since midnight for HH:MM:SS, HH:MM or a time value; None if unparseable.

        Seconds are dropped, or with `round_up` carried to the next whole minute.
        """
        if isinstance(value, time):
            parsed = value
        elif isinstance(value, str):
            parsed = None
            for fmt in ("%H:%M:%S", "%H:%M"):
                try:
                    parsed = datetime.strptime(value.strip(), fmt).time()
                except ValueError:
                    continue
                break
            if parsed is None:
                return None
        else:
            return None

        minutes = parsed.hour * 60 + parsed.minute
        if round_up and (parsed.second or parsed.microsecond):
            minutes += 1
        return minutes

    @staticmethod
    def _slots_for_window(
            target_date: date,
            entry: AvailabilityWithEmployee,
            duration: int,
            booked: Set[str],
            now: datetime
    ) -> List[TimeSlot]:
        window = entry.availability
        # A window never opens before its start
        start = SlotGenerator.parse_time_of_day(window.start_time, round_up=True)
        end = SlotGenerator.parse_time_of_day(window.end_time)

        if start is None or end is None:
            logger.warning(f"Skipping availability with invalid times: {window}")
            return []

        if start >= end:
            logger.warning(f"Skipping availability that ends before it starts: {window}")
            return []

        employee = entry.employee
        employee_id = employee.id if employee else None
        employee_name = employee.name if employee else get_settings().FALLBACK_EMPLOYEE_NAME

        day_start = datetime.combine(target_date, time.min)
        slots = []
        current = start

        # Trailing remainders shorter than the service are never offered
        while current + duration <= min(end, MINUTES_PER_DAY):
            slot_datetime = day_start + timedelta(minutes=current)
            label = slot_datetime.strftime("%H:%M")

            is_past = slot_datetime < now
            is_booked = label in booked

            slots.append(TimeSlot(
                time=label,
                available=not is_past and not is_booked,
                employee_id=employee_id,
                employee_name=employee_name,
            ))

            current += duration

        return slots

    @staticmethod
    def _duration_minutes(service: ServiceDescriptor) -> int:
        if service.duration is None or service.duration <= 0:
            fallback = get_settings().DEFAULT_SLOT_DURATION_MINUTES
            logger.warning(
                f"Service {service.id} has invalid duration {service.duration!r}, using {fallback} minutes"
            )
            return fallback
        return service.duration
