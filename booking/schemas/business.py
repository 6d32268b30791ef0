"""
Pydantic schemas for Business model validation and serialization
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from booking.services.business.business_service import BusinessService


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class BusinessUpdateRequest(BaseModel):
    """Partial update of the business profile. Only provided fields are changed."""
    bus_name: Optional[str] = Field(None, min_length=1, max_length=200)
    bus_email: Optional[EmailStr] = None
    bus_phone: Optional[str] = Field(None, min_length=3, max_length=20)
    bus_owner_fname: Optional[str] = Field(None, max_length=100)
    bus_owner_lname: Optional[str] = Field(None, max_length=100)
    timezone: Optional[str] = Field(None, description="IANA timezone, e.g. Europe/Berlin")

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v):
        if v is None:
            return v
        return BusinessService.validate_timezone(v)


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class BusinessResponse(BaseModel):
    bus_id: str
    bus_name: str
    bus_email: str
    bus_phone: str
    bus_owner_fname: Optional[str] = None
    bus_owner_lname: Optional[str] = None
    timezone: Optional[str] = None
    created_at: Optional[str] = None


class BusinessUpdateResponse(BaseModel):
    """Response after updating the business"""
    business: BusinessResponse
    updated_fields: list
    message: str
