"""
Pydantic schemas for slot generation.

Rows coming out of the data store are copied into these typed records so the
resolver and generator never touch ORM objects or optional nested joins
directly.
"""
import datetime as dt
from datetime import time
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SessionContext(BaseModel):
    """Explicit identity passed into service calls instead of ambient auth state"""
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    business_id: Optional[UUID] = None
    email: Optional[str] = None


class ServiceDescriptor(BaseModel):
    """The part of a service the slot computation needs"""
    model_config = ConfigDict(frozen=True)

    id: int
    duration: Optional[int] = Field(None, description="Duration in minutes")
    business_id: Optional[UUID] = None
    name: Optional[str] = None


class EmployeeSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    service_ids: frozenset = Field(default_factory=frozenset)


class AvailabilityWindow(BaseModel):
    """Raw availability row; times are kept as stored so malformed values survive to the generator"""
    model_config = ConfigDict(frozen=True)

    avail_day: str
    start_time: Union[str, time, None] = None
    end_time: Union[str, time, None] = None


class AvailabilityWithEmployee(BaseModel):
    """Availability row joined with its employee; the employee may be absent"""
    model_config = ConfigDict(frozen=True)

    availability: AvailabilityWindow
    employee: Optional[EmployeeSummary] = None


class TimeSlot(BaseModel):
    """A single selectable time for one employee"""
    model_config = ConfigDict(frozen=True)

    time: str = Field(..., description="HH:MM")
    available: bool
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None


class SlotListResult(BaseModel):
    """Result of one slot request"""
    date: dt.date
    service_id: int
    slots: List[TimeSlot] = Field(default_factory=list)
    message: Optional[str] = None
    error: bool = False
    seq: Optional[int] = None
    stale: bool = False
