# booking/models/service.py
"""
Service Model - bookable services offered by a business
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, DateTime, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from booking.models.base import Base


class Service(Base):
    """
    A service customers can book. The duration drives slot generation.
    """
    __tablename__ = "service"

    serv_id = Column(Integer, primary_key=True, autoincrement=True)
    bus_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("business.bus_id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    serv_name = Column(String(200), nullable=False)
    serv_desc = Column(Text, nullable=True)
    serv_price = Column(Numeric(10, 2), nullable=True)

    # Duration in minutes, always > 0
    serv_min_duration = Column(Integer, nullable=False, default=30)

    # Number of staff needed for the service
    serv_emp_no = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    business = relationship("Business", back_populates="services")
    employee_links = relationship(
        "EmployeeServiceLink",
        back_populates="service",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Service(serv_id={self.serv_id}, name={self.serv_name}, bus_id={self.bus_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "serv_id": self.serv_id,
            "bus_id": str(self.bus_id),
            "serv_name": self.serv_name,
            "serv_desc": self.serv_desc,
            "serv_price": float(self.serv_price) if self.serv_price is not None else None,
            "serv_min_duration": self.serv_min_duration,
            "serv_emp_no": self.serv_emp_no,
            "formatted_duration": self.formatted_duration,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        if not self.serv_min_duration:
            return "Duration varies"

        hours = self.serv_min_duration // 60
        minutes = self.serv_min_duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
