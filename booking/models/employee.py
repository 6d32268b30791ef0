# booking/models/employee.py
"""
Staff models: employees, their weekly availability windows and the
services each employee can perform.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from booking.models.base import Base


class Employee(Base):
    __tablename__ = "employee"

    emp_id = Column(Integer, primary_key=True, autoincrement=True)
    bus_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("business.bus_id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    emp_fname = Column(String(100), nullable=False)
    emp_lname = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    business = relationship("Business", back_populates="employees")
    availabilities = relationship(
        "EmployeeAvailability",
        back_populates="employee",
        cascade="all, delete-orphan"
    )
    service_links = relationship(
        "EmployeeServiceLink",
        back_populates="employee",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Employee(emp_id={self.emp_id}, name={self.display_name})>"

    @property
    def display_name(self) -> str:
        return f"{self.emp_fname or ''} {self.emp_lname or ''}".strip()

    @property
    def service_ids(self) -> set:
        return {link.serv_id for link in self.service_links}


class EmployeeAvailability(Base):
    """Weekly availability window of an employee"""
    __tablename__ = "employee_availability"

    emp_avail_id = Column(Integer, primary_key=True, autoincrement=True)
    emp_id = Column(
        Integer,
        ForeignKey("employee.emp_id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    # "0".."6" with 0=Sunday; older rows may hold 1..7 or weekday names
    avail_day = Column(String(10), nullable=False, index=True)
    start_time = Column(String(8), nullable=False)  # HH:MM:SS format
    end_time = Column(String(8), nullable=False)  # HH:MM:SS format

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="availabilities")

    def __repr__(self):
        return f"<EmployeeAvailability(emp_id={self.emp_id}, day={self.avail_day})>"


class EmployeeServiceLink(Base):
    """Many-to-many 'can perform' relation between employees and services"""
    __tablename__ = "employee_service"
    __table_args__ = (
        UniqueConstraint("emp_id", "serv_id", name="uq_employee_service"),
    )

    emp_serv_id = Column(Integer, primary_key=True, autoincrement=True)
    emp_id = Column(Integer, ForeignKey("employee.emp_id", ondelete="CASCADE"), nullable=False)
    serv_id = Column(Integer, ForeignKey("service.serv_id", ondelete="CASCADE"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="service_links")
    service = relationship("Service", back_populates="employee_links")
