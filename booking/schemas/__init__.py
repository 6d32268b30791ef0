# booking/schemas/__init__.py
from .scheduling import (
    SessionContext,
    ServiceDescriptor,
    EmployeeSummary,
    AvailabilityWindow,
    AvailabilityWithEmployee,
    TimeSlot,
    SlotListResult
)

from .booking import (
    CustomerInfo,
    BookingRequest,
    BookingResponse
)

from .staff import (
    AvailabilityInput,
    EmployeeCreate,
    EmployeeUpdate
)
