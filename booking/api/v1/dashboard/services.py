# booking/api/v1/dashboard/services.py
"""
Service Management API Endpoints
Handles CRUD operations for the services a business offers
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional, List
from pydantic import BaseModel, Field
import logging

from booking.config.database import get_db
from booking.api.dependencies import get_session_context
from booking.models.service import Service
from booking.schemas.scheduling import SessionContext
from booking.services.catalog.service_catalog_service import ServiceCatalogService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dashboard-services"])


# ============================================================================
# Request/Response Models
# ============================================================================

class ServiceCreate(BaseModel):
    """Request model for creating a service"""
    serv_name: str = Field(..., min_length=1, max_length=200)
    serv_desc: Optional[str] = None
    serv_price: Optional[float] = Field(None, ge=0)
    serv_min_duration: int = Field(..., gt=0, description="Duration in minutes")
    serv_emp_no: int = Field(default=1, ge=1)


class ServiceUpdate(BaseModel):
    """Request model for updating a service"""
    serv_name: Optional[str] = Field(None, min_length=1, max_length=200)
    serv_desc: Optional[str] = None
    serv_price: Optional[float] = Field(None, ge=0)
    serv_min_duration: Optional[int] = Field(None, gt=0)
    serv_emp_no: Optional[int] = Field(None, ge=1)


class ServiceResponse(BaseModel):
    """Response model for service data"""
    serv_id: int
    bus_id: str
    serv_name: str
    serv_desc: Optional[str]
    serv_price: Optional[float]
    serv_min_duration: int
    serv_emp_no: int
    formatted_duration: str
    created_at: Optional[str]


class ServiceListResponse(BaseModel):
    """Response model for service list"""
    total: int
    services: List[ServiceResponse]


def _service_to_response(service: Service) -> ServiceResponse:
    return ServiceResponse(**service.to_dict())


# ============================================================================
# Endpoints
# ============================================================================

@router.get("", response_model=ServiceListResponse)
def list_services(
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    List all services of the current business
    """
    services = ServiceCatalogService.list_services(db, session.business_id)

    return ServiceListResponse(
        total=len(services),
        services=[_service_to_response(s) for s in services]
    )


@router.post("", response_model=ServiceResponse, status_code=201)
def create_service(
        service_data: ServiceCreate,
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Create a new service
    """
    try:
        service = ServiceCatalogService.create_service(
            db,
            session.business_id,
            serv_name=service_data.serv_name,
            serv_min_duration=service_data.serv_min_duration,
            serv_desc=service_data.serv_desc,
            serv_price=service_data.serv_price,
            serv_emp_no=service_data.serv_emp_no,
        )
        return _service_to_response(service)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating service: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(
        service_id: int,
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Get service by ID
    """
    try:
        service = ServiceCatalogService.get_service(db, session.business_id, service_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Service not found")

    return _service_to_response(service)


@router.put("/{service_id}", response_model=ServiceResponse)
def update_service(
        service_id: int,
        update_data: ServiceUpdate,
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Update a service
    """
    try:
        service = ServiceCatalogService.update_service(
            db,
            session.business_id,
            service_id,
            update_data.model_dump(exclude_unset=True)
        )
        return _service_to_response(service)

    except LookupError:
        raise HTTPException(status_code=404, detail="Service not found")
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating service: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{service_id}")
def delete_service(
        service_id: int,
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Delete a service together with its employee links
    """
    try:
        ServiceCatalogService.delete_service(db, session.business_id, service_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Service not found")
    except Exception as e:
        logger.error(f"Error deleting service: {e}")
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "success": True,
        "message": "Service deleted"
    }
