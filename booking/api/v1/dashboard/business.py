"""
Business Management Dashboard Routes
Session-authenticated endpoints for the business profile
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from booking.config.database import get_db
from booking.api.dependencies import get_session_context
from booking.models.business import Business
from booking.schemas.business import (
    BusinessUpdateRequest,
    BusinessResponse,
    BusinessUpdateResponse,
)
from booking.schemas.scheduling import SessionContext
from booking.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dashboard-business"])


# ============================================================================
# Helper Functions
# ============================================================================

def detect_changes(business: Business, updates: dict) -> list:
    """
    Detect which fields actually changed by comparing old vs new values.
    Returns list of changed field names.
    """
    changed_fields = []

    for field, new_value in updates.items():
        old_value = getattr(business, field, None)
        if str(old_value) != str(new_value):
            changed_fields.append(field)

    return changed_fields


# ============================================================================
# Endpoints
# ============================================================================

@router.get("", response_model=BusinessResponse)
async def get_business(
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """Get the business administered by the current user."""
    try:
        business = BusinessService.get_business(db, session.business_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Business not found")

    return BusinessResponse(**business.to_dict())


@router.patch("", response_model=BusinessUpdateResponse)
async def update_business(
        update_data: BusinessUpdateRequest,
        session: SessionContext = Depends(get_session_context),
        db: Session = Depends(get_db)
):
    """
    Update the business profile.
    Setting `timezone` changes which slots count as already in the past.
    """
    try:
        business = BusinessService.get_business(db, session.business_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Business not found")

    updates = update_data.model_dump(exclude_unset=True)
    changed_fields = detect_changes(business, updates)

    if not changed_fields:
        return BusinessUpdateResponse(
            business=BusinessResponse(**business.to_dict()),
            updated_fields=[],
            message="No changes detected"
        )

    try:
        business = BusinessService.update_business(
            db,
            session.business_id,
            {field: updates[field] for field in changed_fields}
        )
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating business {session.business_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update business")

    return BusinessUpdateResponse(
        business=BusinessResponse(**business.to_dict()),
        updated_fields=changed_fields,
        message="Business updated successfully"
    )
