# ============================================================================
# booking/api/v1/dashboard/appointments.py
# Session authenticated endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from booking.config.database import get_db
from booking.api.dependencies import get_session_context
from booking.schemas.scheduling import SessionContext
from booking.services.appointment.appointment_query_service import AppointmentQueryService
from booking.services.availability.availability_service import AvailabilityService
from booking.services.business.business_service import BusinessService

router = APIRouter(tags=["dashboard-appointments"])


def _business_today(db: Session, session: SessionContext) -> date:
    try:
        business = BusinessService.get_business(db, session.business_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Business not found")
    return AvailabilityService.business_now(business).date()


@router.get("/appointments")
async def list_appointments(
        target_date: Optional[date] = Query(None, alias="date", description="Day to list, defaults to today"),
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Appointments of one day for your business, earliest first.
    Requires authenticated session.
    """
    if target_date is None:
        target_date = _business_today(db, session)

    return AppointmentQueryService.list_day_appointments(
        db=db,
        business_id=session.business_id,
        target_date=target_date
    )


@router.get("/stats")
async def get_stats(
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """Service, staff and appointment counts for the dashboard header."""
    return AppointmentQueryService.get_dashboard_stats(
        db=db,
        business_id=session.business_id,
        today=_business_today(db, session)
    )
