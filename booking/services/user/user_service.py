# ============================================================================
# FILE: booking/services/user/user_service.py
# User business logic - signup, authentication
# ============================================================================
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone
import logging

from booking.models.user import User
from booking.models.business import Business

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user operations."""

    @staticmethod
    def create_user_with_business(
            db: Session,
            email: str,
            password: str,
            business_name: str,
            business_phone: str,
            full_name: Optional[str] = None,
            owner_fname: Optional[str] = None,
            owner_lname: Optional[str] = None,
            timezone_name: Optional[str] = None
    ) -> User:
        """
        Create a new user together with the business they administer.
        Raises ValueError if email already exists.
        """
        email = email.lower().strip()

        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            raise ValueError("Email already registered")

        business = Business(
            bus_name=business_name,
            bus_email=email,
            bus_phone=business_phone,
            bus_owner_fname=owner_fname,
            bus_owner_lname=owner_lname,
            timezone=timezone_name,
        )
        db.add(business)
        db.flush()

        user = User(
            email=email,
            hashed_password=User.hash_password(password),
            full_name=full_name,
            business_id=business.bus_id,
            is_active=True
        )

        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"Registered user {user.id} with business {business.bus_id}")
        return user

    @staticmethod
    def authenticate_user(
            db: Session,
            email: str,
            password: str
    ) -> Optional[User]:
        """
        Authenticate a user by email and password.
        Returns User if valid, None if invalid credentials.
        """
        user = db.query(User).filter(User.email == email.lower().strip()).first()

        if not user:
            return None

        if not user.is_active:
            return None

        if not user.verify_password(password):
            return None

        # Update last login timestamp
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()

        return user

    @staticmethod
    def get_user_by_id(
            db: Session,
            user_id: UUID
    ) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()
