# booking/schemas/staff.py
"""
Pydantic schemas for employees, their weekly availability and service links
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from booking.services.availability.day_time import (
    format_time_for_storage,
    normalize_day_index,
)


def _validate_clock(v: str) -> str:
    stored = format_time_for_storage(v)
    try:
        datetime.strptime(stored, "%H:%M:%S")
    except (TypeError, ValueError):
        raise ValueError("Time must be in HH:MM or HH:MM:SS format")
    return stored


class AvailabilityInput(BaseModel):
    """One weekly availability window"""
    avail_day: str = Field(..., description="Day of week (0=Sunday .. 6=Saturday, or weekday name)")
    start_time: str = Field(..., description="Start time (HH:MM)")
    end_time: str = Field(..., description="End time (HH:MM)")

    @field_validator("avail_day", mode="before")
    @classmethod
    def validate_day(cls, v) -> str:
        day = normalize_day_index(v)
        if day not in {str(i) for i in range(7)}:
            raise ValueError("Day must be 0-6 (Sunday=0), 1-7 (Monday=1) or a weekday name")
        return day

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return _validate_clock(v)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


def _one_window_per_day(availabilities: Optional[List[AvailabilityInput]]):
    if availabilities is None:
        return availabilities
    days = [a.avail_day for a in availabilities]
    if len(days) != len(set(days)):
        raise ValueError("Only one availability window per weekday is allowed")
    return availabilities


class EmployeeCreate(BaseModel):
    """Request model for creating an employee"""
    emp_fname: str = Field(..., min_length=1, max_length=100)
    emp_lname: Optional[str] = Field(None, max_length=100)
    availabilities: List[AvailabilityInput] = Field(default_factory=list)
    service_ids: List[int] = Field(default_factory=list)

    @field_validator("availabilities")
    @classmethod
    def unique_days(cls, v):
        return _one_window_per_day(v)


class EmployeeUpdate(BaseModel):
    """
    Request model for updating an employee.
    When `availabilities` or `service_ids` is given, the stored set is replaced.
    """
    emp_fname: Optional[str] = Field(None, min_length=1, max_length=100)
    emp_lname: Optional[str] = Field(None, max_length=100)
    availabilities: Optional[List[AvailabilityInput]] = None
    service_ids: Optional[List[int]] = None

    @field_validator("availabilities")
    @classmethod
    def unique_days(cls, v):
        return _one_window_per_day(v)
