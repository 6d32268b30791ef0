# ============================================================================
# booking/api/v1/dashboard/employees.py
# Session authenticated staff management - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session
import logging

from booking.config.database import get_db
from booking.api.dependencies import get_session_context
from booking.schemas.scheduling import SessionContext
from booking.schemas.staff import EmployeeCreate, EmployeeUpdate
from booking.services.employee.employee_service import EmployeeService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dashboard-employees"])


@router.get("")
async def list_employees(
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    All employees of your business with their weekly availability
    and the services they perform.
    """
    employees = EmployeeService.list_employees(db, session.business_id)
    return {
        "total": len(employees),
        "employees": employees
    }


@router.post("", status_code=201)
async def create_employee(
        data: EmployeeCreate,
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Add an employee. Availability times may be sent as HH:MM and are
    stored as HH:MM:SS.
    """
    try:
        employee = EmployeeService.create_employee(db, session.business_id, data)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating employee: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to create employee")

    return EmployeeService.serialize(employee)


@router.get("/{employee_id}")
async def get_employee(
        employee_id: int = Path(..., description="The employee ID"),
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    try:
        employee = EmployeeService.get_employee(db, session.business_id, employee_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Employee not found")

    return EmployeeService.serialize(employee)


@router.put("/{employee_id}")
async def update_employee(
        data: EmployeeUpdate,
        employee_id: int = Path(..., description="The employee ID"),
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Update an employee. A given `availabilities` or `service_ids` list
    replaces the stored one.
    """
    try:
        employee = EmployeeService.update_employee(db, session.business_id, employee_id, data)
    except LookupError:
        raise HTTPException(status_code=404, detail="Employee not found")
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating employee {employee_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update employee")

    return EmployeeService.serialize(employee)


@router.delete("/{employee_id}")
async def delete_employee(
        employee_id: int = Path(..., description="The employee ID"),
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    try:
        EmployeeService.delete_employee(db, session.business_id, employee_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Employee not found")

    return {"success": True, "message": "Employee deleted"}
