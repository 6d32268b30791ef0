# ============================================================================
# FILE: booking/api/v1/public/auth.py
# Public authentication endpoints - signup, login, current user
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
import logging

from booking.api.dependencies import (
    get_db,
    get_current_active_user,
    create_access_token,
)
from booking.models.user import User
from booking.services.business.business_service import BusinessService
from booking.services.user.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


# ============================================================================
# Pydantic Schemas
# ============================================================================

class SignupRequest(BaseModel):
    """Request body for signup: creates the user and their business."""
    email: EmailStr
    password: str = Field(..., min_length=8, description="Password must be at least 8 characters")
    full_name: Optional[str] = None
    business_name: str = Field(..., min_length=1, max_length=200)
    business_phone: str = Field(..., min_length=3, max_length=20)
    owner_fname: Optional[str] = Field(None, max_length=100)
    owner_lname: Optional[str] = Field(None, max_length=100)
    timezone: Optional[str] = Field(None, description="IANA timezone, e.g. Europe/Berlin")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "owner@example.com",
                "password": "SecurePass123!",
                "full_name": "John Doe",
                "business_name": "Downtown Barbers",
                "business_phone": "+1234567890",
                "timezone": "America/New_York"
            }
        }


class LoginRequest(BaseModel):
    """Request body for login."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Response with the access token."""
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    full_name: Optional[str] = None
    business_id: Optional[str] = None


def _token_response(user: User) -> TokenResponse:
    access_token = create_access_token({"sub": str(user.id)})
    return TokenResponse(
        access_token=access_token,
        user_id=str(user.id),
        email=user.email,
        full_name=user.full_name,
        business_id=str(user.business_id) if user.business_id else None,
    )


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
        request: SignupRequest,
        db: Session = Depends(get_db)
):
    """
    Register a new business owner.
    Creates the user and the business in one step and returns an access token.
    """
    try:
        if request.timezone:
            BusinessService.validate_timezone(request.timezone)

        user = UserService.create_user_with_business(
            db=db,
            email=request.email,
            password=request.password,
            full_name=request.full_name,
            business_name=request.business_name,
            business_phone=request.business_phone,
            owner_fname=request.owner_fname,
            owner_lname=request.owner_lname,
            timezone_name=request.timezone,
        )
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(
        request: LoginRequest,
        db: Session = Depends(get_db)
):
    """Log in with email and password."""
    user = UserService.authenticate_user(db, request.email, request.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _token_response(user)


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_active_user)):
    """Return the currently authenticated user."""
    return {
        "user_id": str(current_user.id),
        "email": current_user.email,
        "full_name": current_user.full_name,
        "business_id": str(current_user.business_id) if current_user.business_id else None,
        "is_active": current_user.is_active,
    }
