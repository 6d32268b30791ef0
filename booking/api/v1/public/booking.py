# ============================================================================
# FILE: booking/api/v1/public/booking.py
# Public booking flow - services, time slots, confirmation
# ============================================================================
from fastapi import APIRouter, Depends, Header, HTTPException, Path, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID
import logging

from booking.config.database import get_db
from booking.core.exceptions import AvailabilityFetchError, SlotTakenError
from booking.schemas.booking import BookingRequest, BookingResponse
from booking.schemas.scheduling import SlotListResult
from booking.services.appointment.appointment_service import BookingService
from booking.services.availability.availability_service import AvailabilityService
from booking.services.availability.request_sequencer import slot_request_sequencer
from booking.services.business.business_service import BusinessService
from booking.services.catalog.service_catalog_service import ServiceCatalogService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/businesses/{bus_id}", tags=["public-booking"])


def _require_business(db: Session, bus_id: UUID):
    try:
        return BusinessService.get_business(db, bus_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Business not found")


@router.get("/services")
async def list_services(
        bus_id: UUID = Path(..., description="The business ID"),
        db: Session = Depends(get_db)
):
    """List the services customers can book, ordered by name."""
    business = _require_business(db, bus_id)
    services = ServiceCatalogService.list_services(db, business.bus_id)

    return {
        "business_id": str(business.bus_id),
        "business_name": business.bus_name,
        "total": len(services),
        "services": [s.to_dict() for s in services]
    }


@router.get("/slots", response_model=SlotListResult)
async def get_time_slots(
        bus_id: UUID = Path(..., description="The business ID"),
        target_date: date = Query(..., alias="date", description="Date to list slots for (YYYY-MM-DD)"),
        service_id: int = Query(..., description="Selected service"),
        seq: Optional[int] = Query(None, ge=0, description="Client request sequence number"),
        client_key: Optional[str] = Header(None, alias="X-Client-Key"),
        db: Session = Depends(get_db)
):
    """
    Time slots for one date and service.

    Clients that fire several requests while the user changes the date should
    send an increasing `seq` with a stable `X-Client-Key`; a response whose
    request was overtaken comes back with `stale=true` and no slots.
    """
    _require_business(db, bus_id)

    if client_key:
        seq = slot_request_sequencer.observe(client_key, seq)

    try:
        result = AvailabilityService.get_time_slots(db, bus_id, target_date, service_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Service not found")

    result.seq = seq

    if client_key and not slot_request_sequencer.is_latest(client_key, seq):
        logger.info(f"Discarding stale slot response seq={seq} for client {client_key}")
        result.slots = []
        result.stale = True

    return result


@router.post("/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def confirm_booking(
        request: BookingRequest,
        bus_id: UUID = Path(..., description="The business ID"),
        db: Session = Depends(get_db)
):
    """
    Confirm a booking: stores the customer and the appointment together.
    Returns 409 when the slot was taken in the meantime.
    """
    _require_business(db, bus_id)

    try:
        appointment = BookingService.confirm_booking(db, bus_id, request)
    except LookupError:
        raise HTTPException(status_code=404, detail="Service not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SlotTakenError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except AvailabilityFetchError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating booking: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="There was an error creating your booking. Please try again."
        )

    return BookingResponse(
        app_id=appointment.app_id,
        app_datetime=appointment.app_datetime,
        service_id=appointment.serv_id,
        employee_id=appointment.emp_id,
        employee_name=appointment.employee.display_name if appointment.employee else None,
        customer_id=appointment.cust_id,
    )
