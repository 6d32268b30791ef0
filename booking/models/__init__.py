# booking/models/__init__.py
from .base import Base
from .business import Business
from .service import Service
from .employee import Employee, EmployeeAvailability, EmployeeServiceLink
from .customer import Customer
from .appointment import Appointment
from .user import User

__all__ = [
    "Base",
    "Business",
    "Service",
    "Employee",
    "EmployeeAvailability",
    "EmployeeServiceLink",
    "Customer",
    "Appointment",
    "User",
]
