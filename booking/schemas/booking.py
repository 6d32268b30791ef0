# booking/schemas/booking.py
"""Request/response schemas for the public booking flow"""
import datetime as dt
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class CustomerInfo(BaseModel):
    """Contact details collected before confirmation"""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=3, max_length=20)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        v = v.strip()
        digits = v[1:] if v.startswith("+") else v
        if not digits.isdigit():
            raise ValueError("Phone number may only contain digits and a leading +")
        return v


class BookingRequest(BaseModel):
    """Appointment booking request"""
    service_id: int = Field(..., description="Selected service")
    date: dt.date = Field(..., description="Appointment date (YYYY-MM-DD)")
    time: str = Field(..., description="Slot time (HH:MM)")
    employee_id: Optional[int] = Field(None, description="Employee shown with the selected slot")
    customer: CustomerInfo

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        try:
            parsed = datetime.strptime(v.strip(), "%H:%M")
        except ValueError:
            raise ValueError("Time must be in HH:MM format")
        return parsed.strftime("%H:%M")

    class Config:
        json_schema_extra = {
            "example": {
                "service_id": 1,
                "date": "2026-01-05",
                "time": "09:30",
                "employee_id": 3,
                "customer": {
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "email": "jane@example.com",
                    "phone": "+1234567890"
                }
            }
        }


class BookingResponse(BaseModel):
    """Appointment booking response"""
    app_id: int
    app_datetime: datetime
    service_id: int
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    customer_id: int
    message: str = "Your appointment has been successfully booked."
