# booking/services/business/business_service.py
"""Service for managing business operations"""
from typing import Any, Dict
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from sqlalchemy.orm import Session

from booking.models.business import Business

logger = logging.getLogger(__name__)


class BusinessService:
    """Handles business-related operations"""

    @staticmethod
    def get_business(db: Session, business_id: UUID) -> Business:
        business = db.query(Business).filter(Business.bus_id == business_id).first()
        if not business:
            raise LookupError(f"Business {business_id} not found")
        return business

    @staticmethod
    def update_business(db: Session, business_id: UUID, updates: Dict[str, Any]) -> Business:
        business = BusinessService.get_business(db, business_id)

        if updates.get("timezone"):
            BusinessService.validate_timezone(updates["timezone"])

        for field, value in updates.items():
            setattr(business, field, value)

        db.commit()
        db.refresh(business)

        logger.info(f"Updated business {business_id}: {list(updates.keys())}")
        return business

    @staticmethod
    def validate_timezone(tz_name: str) -> str:
        try:
            ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {tz_name}")
        return tz_name
