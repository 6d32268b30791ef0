# booking/models/business.py
"""
Business Model - the tenant that owns services, employees and appointments
"""
from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from booking.models.base import Base


class Business(Base):
    __tablename__ = "business"

    bus_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    bus_name = Column(String(200), nullable=False)
    bus_email = Column(String(255), nullable=False)
    bus_phone = Column(String(20), nullable=False)
    bus_owner_fname = Column(String(100), nullable=True)
    bus_owner_lname = Column(String(100), nullable=True)

    # IANA timezone used to decide which slots are already in the past
    timezone = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    services = relationship("Service", back_populates="business", cascade="all, delete-orphan")
    employees = relationship("Employee", back_populates="business", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Business(bus_id={self.bus_id}, name={self.bus_name})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "bus_id": str(self.bus_id),
            "bus_name": self.bus_name,
            "bus_email": self.bus_email,
            "bus_phone": self.bus_phone,
            "bus_owner_fname": self.bus_owner_fname,
            "bus_owner_lname": self.bus_owner_lname,
            "timezone": self.timezone,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
