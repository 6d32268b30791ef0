"""
Unit tests for slot generation.

Covers:
- slot count and window boundaries
- past filtering relative to `now`
- exclusion of booked times for every employee
- de-duplication and ordering
- malformed rows and invalid durations
"""
from datetime import date, datetime, time

import pytest

from booking.schemas.scheduling import (
    AvailabilityWindow,
    AvailabilityWithEmployee,
    EmployeeSummary,
    ServiceDescriptor,
)
from booking.services.availability.slot_generator import SlotGenerator

MONDAY = date(2024, 1, 8)
EARLY_MONDAY = datetime(2024, 1, 8, 6, 0)
SUNDAY_BEFORE = datetime(2024, 1, 7, 12, 0)


def window(start, end, employee_id=1, name="Ana Silva", day="1"):
    employee = None
    if employee_id is not None:
        employee = EmployeeSummary(id=employee_id, name=name, service_ids=frozenset({10}))
    return AvailabilityWithEmployee(
        availability=AvailabilityWindow(avail_day=day, start_time=start, end_time=end),
        employee=employee,
    )


def service(duration=30):
    return ServiceDescriptor(id=10, duration=duration)


def times(slots):
    return [s.time for s in slots]


class TestSlotCount:
    """Slots tile the window from its start without overrunning its end."""

    @pytest.mark.parametrize("start,end,duration,expected", [
        ("09:00:00", "11:00:00", 30, 4),
        ("09:00:00", "10:45:00", 30, 3),
        ("09:00:00", "10:00:00", 45, 1),
        ("09:00:00", "09:20:00", 30, 0),
        ("08:15:00", "17:00:00", 60, 8),
    ])
    def test_count_is_floor_of_window_over_duration(self, start, end, duration, expected):
        """Test the number of slots equals floor((end - start) / duration)."""
        slots = SlotGenerator.generate(MONDAY, service(duration), [window(start, end)], [], now=SUNDAY_BEFORE)
        assert len(slots) == expected

    def test_no_slot_ends_after_window(self):
        """Test the last slot plus the duration stays inside the window."""
        slots = SlotGenerator.generate(
            MONDAY, service(45), [window("09:00:00", "11:00:00")], [], now=SUNDAY_BEFORE
        )
        assert times(slots) == ["09:00", "09:45"]

    def test_accepts_time_values_and_short_strings(self):
        """Test start/end given as time objects or HH:MM behave like HH:MM:SS."""
        from_objects = SlotGenerator.generate(
            MONDAY, service(), [window(time(9, 0), time(10, 0))], [], now=SUNDAY_BEFORE
        )
        from_short = SlotGenerator.generate(
            MONDAY, service(), [window("09:00", "10:00")], [], now=SUNDAY_BEFORE
        )
        assert times(from_objects) == times(from_short) == ["09:00", "09:30"]

    def test_start_with_seconds_rounds_up(self):
        """Test a window starting at 09:00:30 offers its first slot at 09:01."""
        slots = SlotGenerator.generate(
            MONDAY, service(), [window("09:00:30", "10:01:00")], [], now=SUNDAY_BEFORE
        )
        assert times(slots) == ["09:01", "09:31"]

    def test_end_with_seconds_is_truncated(self):
        """Test seconds on the end time never extend the window."""
        slots = SlotGenerator.generate(
            MONDAY, service(), [window(time(9, 0), time(9, 59, 59))], [], now=SUNDAY_BEFORE
        )
        assert times(slots) == ["09:00"]


class TestScenarios:

    def test_free_monday_morning(self):
        """Test a 09:00-11:00 window with no bookings yields four available slots."""
        slots = SlotGenerator.generate(
            MONDAY, service(30), [window("09:00:00", "11:00:00")], [], now=EARLY_MONDAY
        )

        assert times(slots) == ["09:00", "09:30", "10:00", "10:30"]
        assert all(s.available for s in slots)
        assert all(s.employee_id == 1 and s.employee_name == "Ana Silva" for s in slots)

    def test_booked_slot_is_unavailable(self):
        """Test an appointment at 10:00 marks only that slot unavailable."""
        slots = SlotGenerator.generate(
            MONDAY,
            service(30),
            [window("09:00:00", "11:00:00")],
            [datetime(2024, 1, 8, 10, 0)],
            now=EARLY_MONDAY,
        )

        availability = {s.time: s.available for s in slots}
        assert availability == {"09:00": True, "09:30": True, "10:00": False, "10:30": True}


class TestPastFiltering:

    def test_slots_before_now_are_unavailable(self):
        """Test slots starting before `now` on the same day are unavailable."""
        now = datetime(2024, 1, 8, 9, 45)
        slots = SlotGenerator.generate(MONDAY, service(), [window("09:00:00", "11:00:00")], [], now=now)

        availability = {s.time: s.available for s in slots}
        assert availability == {"09:00": False, "09:30": False, "10:00": True, "10:30": True}

    def test_slot_starting_exactly_now_is_available(self):
        """Test a slot is only past when it starts strictly before `now`."""
        now = datetime(2024, 1, 8, 9, 30)
        slots = SlotGenerator.generate(MONDAY, service(), [window("09:00:00", "10:00:00")], [], now=now)
        assert [s.available for s in slots] == [False, True]

    def test_future_date_ignores_time_of_day(self):
        """Test a late `now` on an earlier day does not hide any slot."""
        now = datetime(2024, 1, 7, 23, 30)
        slots = SlotGenerator.generate(MONDAY, service(), [window("09:00:00", "11:00:00")], [], now=now)
        assert all(s.available for s in slots)

    def test_past_date_is_fully_unavailable(self):
        """Test every slot of a day that already passed is unavailable."""
        now = datetime(2024, 1, 9, 8, 0)
        slots = SlotGenerator.generate(MONDAY, service(), [window("09:00:00", "11:00:00")], [], now=now)
        assert slots and not any(s.available for s in slots)


class TestBookingExclusion:

    def test_booking_blocks_time_for_every_employee(self):
        """Test a booked 09:00 is unavailable no matter which employee holds it."""
        eligible = [
            window("09:00:00", "10:00:00", employee_id=1, name="Ana Silva"),
            window("09:00:00", "10:00:00", employee_id=2, name="Ben Ode"),
        ]
        slots = SlotGenerator.generate(MONDAY, service(), eligible, ["09:00"], now=EARLY_MONDAY)

        at_nine = [s for s in slots if s.time == "09:00"]
        assert len(at_nine) == 2
        assert not any(s.available for s in at_nine)

    @pytest.mark.parametrize("booked", [
        "2024-01-08T09:30:00",
        "2024-01-08 09:30:59",
        "2024-01-08T09:30:00+02:00",
        "9:30",
        datetime(2024, 1, 8, 9, 30, 45),
    ])
    def test_seconds_and_offsets_are_ignored(self, booked):
        """Test booked values match on hour and minute only."""
        slots = SlotGenerator.generate(
            MONDAY, service(), [window("09:00:00", "10:00:00")], [booked], now=EARLY_MONDAY
        )
        assert {s.time: s.available for s in slots} == {"09:00": True, "09:30": False}

    def test_unparseable_booking_is_skipped(self):
        """Test garbage in the booked list does not block anything."""
        assert SlotGenerator.booked_times(["not a time", None]) == set()


class TestOrderingAndDeduplication:

    def test_sorted_by_time_across_windows(self):
        """Test slots from several employees are merged in time order."""
        eligible = [
            window("10:00:00", "11:00:00", employee_id=2, name="Ben Ode"),
            window("09:00:00", "10:00:00", employee_id=1, name="Ana Silva"),
        ]
        slots = SlotGenerator.generate(MONDAY, service(), eligible, [], now=EARLY_MONDAY)
        assert times(slots) == ["09:00", "09:30", "10:00", "10:30"]

    def test_duplicate_time_and_employee_kept_once(self):
        """Test overlapping windows of one employee do not repeat a slot."""
        eligible = [
            window("09:00:00", "10:00:00", employee_id=1),
            window("09:00:00", "11:00:00", employee_id=1),
        ]
        slots = SlotGenerator.generate(MONDAY, service(), eligible, [], now=EARLY_MONDAY)
        assert times(slots) == ["09:00", "09:30", "10:00", "10:30"]

    def test_same_time_different_employees_both_kept(self):
        """Test each employee gets their own slot at a shared time."""
        eligible = [
            window("09:00:00", "09:30:00", employee_id=1),
            window("09:00:00", "09:30:00", employee_id=2, name="Ben Ode"),
        ]
        slots = SlotGenerator.generate(MONDAY, service(), eligible, [], now=EARLY_MONDAY)
        assert sorted(s.employee_id for s in slots) == [1, 2]

    def test_idempotent(self):
        """Test identical inputs give identical ordered output."""
        eligible = [window("09:00:00", "12:00:00"), window("10:00:00", "11:00:00", employee_id=2)]
        booked = ["10:30"]
        first = SlotGenerator.generate(MONDAY, service(), eligible, booked, now=EARLY_MONDAY)
        second = SlotGenerator.generate(MONDAY, service(), eligible, booked, now=EARLY_MONDAY)
        assert first == second


class TestMalformedInput:

    def test_invalid_times_are_skipped(self):
        """Test a row with unparseable times contributes no slots."""
        eligible = [window("nine", "11:00:00"), window("09:00:00", "10:00:00", employee_id=2)]
        slots = SlotGenerator.generate(MONDAY, service(), eligible, [], now=EARLY_MONDAY)
        assert {s.employee_id for s in slots} == {2}

    def test_inverted_window_is_skipped(self):
        """Test a window ending before it starts yields nothing."""
        slots = SlotGenerator.generate(
            MONDAY, service(), [window("11:00:00", "09:00:00")], [], now=EARLY_MONDAY
        )
        assert slots == []

    @pytest.mark.parametrize("duration", [None, 0, -15])
    def test_invalid_duration_falls_back_to_thirty_minutes(self, duration):
        """Test a missing or non-positive duration uses 30 minute slots."""
        slots = SlotGenerator.generate(
            MONDAY, service(duration), [window("09:00:00", "10:00:00")], [], now=EARLY_MONDAY
        )
        assert times(slots) == ["09:00", "09:30"]

    def test_missing_employee_uses_fallback_name(self):
        """Test a window without an employee still produces labelled slots."""
        slots = SlotGenerator.generate(
            MONDAY, service(), [window("09:00:00", "09:30:00", employee_id=None)], [], now=EARLY_MONDAY
        )
        assert len(slots) == 1
        assert slots[0].employee_id is None
        assert slots[0].employee_name == "Staff"
