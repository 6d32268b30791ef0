# booking/models/appointment.py
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from booking.models.base import Base


class Appointment(Base):
    __tablename__ = "appointment"
    __table_args__ = (
        # One booking per employee and start time
        UniqueConstraint("emp_id", "app_datetime", name="uq_appointment_employee_datetime"),
    )

    app_id = Column(Integer, primary_key=True, autoincrement=True)

    # References
    bus_id = Column(Uuid(as_uuid=True), ForeignKey("business.bus_id", ondelete="CASCADE"), nullable=False, index=True)
    serv_id = Column(Integer, ForeignKey("service.serv_id"), nullable=False)
    emp_id = Column(Integer, ForeignKey("employee.emp_id", ondelete="SET NULL"), nullable=True)
    cust_id = Column(Integer, ForeignKey("customer.cust_id"), nullable=False)
    cust_phone = Column(String(20), nullable=True)

    # Local wall-clock, no timezone
    app_datetime = Column(DateTime(timezone=False), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("Customer")
    service = relationship("Service")
    employee = relationship("Employee")

    def __repr__(self):
        return f"<Appointment(app_id={self.app_id}, at={self.app_datetime}, emp_id={self.emp_id})>"
