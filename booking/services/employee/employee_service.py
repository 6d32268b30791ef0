# ============================================================================
# booking/services/employee/employee_service.py
# Staff management - employees, weekly availability and service links
# ============================================================================
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session, selectinload

from booking.models.employee import Employee, EmployeeAvailability, EmployeeServiceLink
from booking.models.service import Service
from booking.schemas.staff import AvailabilityInput, EmployeeCreate, EmployeeUpdate
from booking.services.availability.day_time import (
    format_time_for_display,
    normalize_day_index,
    weekday_name,
)

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service layer for employee operations."""

    @staticmethod
    def list_employees(db: Session, business_id: UUID) -> List[Dict[str, Any]]:
        employees = db.query(Employee).options(
            selectinload(Employee.availabilities),
            selectinload(Employee.service_links)
        ).filter(
            Employee.bus_id == business_id
        ).order_by(Employee.emp_fname.asc()).all()

        return [EmployeeService.serialize(emp) for emp in employees]

    @staticmethod
    def get_employee(db: Session, business_id: UUID, employee_id: int) -> Employee:
        employee = db.query(Employee).filter(
            Employee.emp_id == employee_id,
            Employee.bus_id == business_id
        ).first()

        if not employee:
            raise LookupError(f"Employee {employee_id} not found")

        return employee

    @staticmethod
    def create_employee(db: Session, business_id: UUID, data: EmployeeCreate) -> Employee:
        """Create the employee row, then its availability windows and service links."""
        EmployeeService._check_services(db, business_id, data.service_ids)

        employee = Employee(
            bus_id=business_id,
            emp_fname=data.emp_fname,
            emp_lname=data.emp_lname,
        )
        db.add(employee)
        db.flush()

        EmployeeService._add_availabilities(db, employee.emp_id, data.availabilities)
        EmployeeService._add_service_links(db, employee.emp_id, data.service_ids)

        db.commit()
        db.refresh(employee)

        logger.info(f"Created employee {employee.emp_id}: {employee.display_name}")
        return employee

    @staticmethod
    def update_employee(
            db: Session,
            business_id: UUID,
            employee_id: int,
            data: EmployeeUpdate
    ) -> Employee:
        """Update names; availability windows and service links are deleted and re-inserted."""
        employee = EmployeeService.get_employee(db, business_id, employee_id)

        if data.service_ids is not None:
            EmployeeService._check_services(db, business_id, data.service_ids)

        if data.emp_fname is not None:
            employee.emp_fname = data.emp_fname
        if data.emp_lname is not None:
            employee.emp_lname = data.emp_lname

        if data.availabilities is not None:
            db.query(EmployeeAvailability).filter(
                EmployeeAvailability.emp_id == employee.emp_id
            ).delete(synchronize_session=False)
            EmployeeService._add_availabilities(db, employee.emp_id, data.availabilities)

        if data.service_ids is not None:
            db.query(EmployeeServiceLink).filter(
                EmployeeServiceLink.emp_id == employee.emp_id
            ).delete(synchronize_session=False)
            EmployeeService._add_service_links(db, employee.emp_id, data.service_ids)

        db.commit()
        db.expire(employee)
        db.refresh(employee)

        logger.info(f"Updated employee {employee.emp_id}")
        return employee

    @staticmethod
    def delete_employee(db: Session, business_id: UUID, employee_id: int) -> None:
        employee = EmployeeService.get_employee(db, business_id, employee_id)
        db.delete(employee)
        db.commit()
        logger.info(f"Deleted employee {employee_id}")

    @staticmethod
    def serialize(employee: Employee) -> Dict[str, Any]:
        """Employee with availability days normalized and times shown as HH:MM"""
        availabilities = []
        for avail in employee.availabilities:
            day = normalize_day_index(avail.avail_day)
            availabilities.append({
                "emp_avail_id": avail.emp_avail_id,
                "avail_day": day,
                "day_name": weekday_name(day),
                "start_time": format_time_for_display(avail.start_time),
                "end_time": format_time_for_display(avail.end_time),
            })

        availabilities.sort(key=lambda a: (not a["avail_day"].isdecimal(), a["avail_day"]))

        return {
            "emp_id": employee.emp_id,
            "bus_id": str(employee.bus_id),
            "emp_fname": employee.emp_fname,
            "emp_lname": employee.emp_lname,
            "display_name": employee.display_name,
            "availabilities": availabilities,
            "service_ids": sorted(employee.service_ids),
        }

    @staticmethod
    def _add_availabilities(db: Session, employee_id: int, availabilities: List[AvailabilityInput]) -> None:
        for avail in availabilities:
            db.add(EmployeeAvailability(
                emp_id=employee_id,
                avail_day=avail.avail_day,
                start_time=avail.start_time,
                end_time=avail.end_time,
            ))

    @staticmethod
    def _add_service_links(db: Session, employee_id: int, service_ids: List[int]) -> None:
        for service_id in dict.fromkeys(service_ids):
            db.add(EmployeeServiceLink(emp_id=employee_id, serv_id=service_id))

    @staticmethod
    def _check_services(db: Session, business_id: UUID, service_ids: Optional[List[int]]) -> None:
        """Linked services must belong to the same business"""
        if not service_ids:
            return

        wanted = set(service_ids)
        found = {
            row.serv_id for row in db.query(Service.serv_id).filter(
                Service.serv_id.in_(wanted),
                Service.bus_id == business_id
            ).all()
        }

        missing = wanted - found
        if missing:
            raise ValueError(f"Unknown services: {sorted(missing)}")
