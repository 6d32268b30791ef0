# ============================================================================
# booking/services/catalog/service_catalog_service.py
# CRUD for the services a business offers
# ============================================================================
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from booking.models.service import Service

logger = logging.getLogger(__name__)


class ServiceCatalogService:
    """Handles service catalog operations"""

    @staticmethod
    def list_services(db: Session, business_id: UUID) -> List[Service]:
        return db.query(Service).filter(
            Service.bus_id == business_id
        ).order_by(Service.serv_name.asc()).all()

    @staticmethod
    def get_service(db: Session, business_id: UUID, service_id: int) -> Service:
        service = db.query(Service).filter(
            Service.serv_id == service_id,
            Service.bus_id == business_id
        ).first()

        if not service:
            raise LookupError(f"Service {service_id} not found")

        return service

    @staticmethod
    def create_service(
            db: Session,
            business_id: UUID,
            serv_name: str,
            serv_min_duration: int,
            serv_desc: Optional[str] = None,
            serv_price: Optional[float] = None,
            serv_emp_no: int = 1
    ) -> Service:
        if serv_min_duration is None or serv_min_duration <= 0:
            raise ValueError("Duration must be greater than zero")

        service = Service(
            bus_id=business_id,
            serv_name=serv_name,
            serv_desc=serv_desc,
            serv_price=Decimal(str(serv_price)) if serv_price is not None else None,
            serv_min_duration=serv_min_duration,
            serv_emp_no=serv_emp_no,
        )

        db.add(service)
        db.commit()
        db.refresh(service)

        logger.info(f"Created service {service.serv_id}: {service.serv_name}")
        return service

    @staticmethod
    def update_service(
            db: Session,
            business_id: UUID,
            service_id: int,
            updates: Dict[str, Any]
    ) -> Service:
        service = ServiceCatalogService.get_service(db, business_id, service_id)

        if "serv_min_duration" in updates and (
                updates["serv_min_duration"] is None or updates["serv_min_duration"] <= 0):
            raise ValueError("Duration must be greater than zero")

        for field, value in updates.items():
            if field == "serv_price" and value is not None:
                value = Decimal(str(value))
            setattr(service, field, value)

        db.commit()
        db.refresh(service)

        logger.info(f"Updated service {service_id}: {list(updates.keys())}")
        return service

    @staticmethod
    def delete_service(db: Session, business_id: UUID, service_id: int) -> None:
        service = ServiceCatalogService.get_service(db, business_id, service_id)
        db.delete(service)
        db.commit()
        logger.info(f"Deleted service {service_id}")
